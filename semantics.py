"""
inc Semantics Analysis
Declare-before-use checking over the syntax tree; no values are computed
"""

from typing import Callable, Dict, Set
from parsing import (
  Program, Statement, Expression,
  Identifier, IncrementCall,
  VariableDeclaration, PrintStatement,
)
from error_handling import IncSemanticError


class SemanticAnalyzer:
  """Walks a Program in source order tracking which names have been declared"""

  def __init__(self, debug: bool = False):
    self.debug = debug

  def analyze(self, program: Program) -> None:
    """Raise IncSemanticError at the first reference to an undeclared name"""
    declared: Set[str] = set()
    for statement in program.statements:
      self._analyze_statement(statement, declared)
    if self.debug:
      print(f"[DEBUG] Semantic analysis passed, {len(declared)} names declared")

  # ============================================================================
  # STATEMENT ANALYSIS
  # ============================================================================

  def _analyze_statement(self, statement: Statement, declared: Set[str]) -> None:
    handlers: Dict[type, Callable[[], None]] = {
        VariableDeclaration: lambda: self._declare(statement.name, declared),
        PrintStatement: lambda: self._analyze_expression(statement.expression, declared),
    }
    handler = handlers.get(type(statement))
    if handler is not None:
      handler()

  def _declare(self, name: str, declared: Set[str]) -> None:
    # Redeclaration is allowed and needs no bookkeeping
    if self.debug:
      print(f"[DEBUG] Declared '{name}'")
    declared.add(name)

  # ============================================================================
  # EXPRESSION ANALYSIS
  # ============================================================================

  def _analyze_expression(self, expr: Expression, declared: Set[str]) -> None:
    # inc(...) wraps exactly one argument, so nesting is a chain to walk down
    while isinstance(expr, IncrementCall):
      expr = expr.argument
    if isinstance(expr, Identifier):
      if expr.name not in declared:
        raise IncSemanticError(expr.name)


# ============================================================================
# FACTORY FUNCTIONS (for main.py)
# ============================================================================

def create_analyzer(debug: bool = False) -> SemanticAnalyzer:
  """Create a semantic analyzer"""
  return SemanticAnalyzer(debug=debug)


def create_debug_analyzer() -> SemanticAnalyzer:
  """Create a semantic analyzer with debug enabled"""
  return SemanticAnalyzer(debug=True)
