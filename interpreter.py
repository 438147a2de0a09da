"""
inc Interpreter
Direct tree-walking execution of an analyzed Program
Output lines are handed to an emit callback at the boundary
"""

from typing import Callable, Dict, List
from parsing import (
  Program, Statement, Expression,
  NumberLiteral, Identifier, IncrementCall,
  VariableDeclaration, PrintStatement,
)
from error_handling import IncRuntimeError


def format_output(value: int) -> str:
  """Format the value of a print statement as an output line"""
  return f"Output: {value}"


class Interpreter:
  """Executes statements in order against a per-run name -> int memory"""

  def __init__(self, debug: bool = False, emit: Callable[[str], None] = print):
    self.debug = debug
    self.emit = emit

  def interpret(self, program: Program) -> List[str]:
    """Run a program and return its output lines

    Each line is emitted as soon as it is produced, so lines emitted before a
    failing statement stay emitted when IncRuntimeError propagates.
    """
    memory: Dict[str, int] = {}
    output: List[str] = []
    for statement in program.statements:
      self._execute(statement, memory, output)
    if self.debug:
      print(f"[DEBUG] Execution finished, memory: {memory}")
    return output

  # ============================================================================
  # STATEMENT EXECUTION
  # ============================================================================

  def _execute(self, statement: Statement, memory: Dict[str, int], output: List[str]) -> None:
    handlers = {
        VariableDeclaration: lambda: self._execute_declaration(statement, memory),
        PrintStatement: lambda: self._execute_print(statement, memory, output),
    }
    handler = handlers.get(type(statement))
    if handler is None:
      raise IncRuntimeError("Unknown statement type.")
    handler()

  def _execute_declaration(self, decl: VariableDeclaration, memory: Dict[str, int]) -> None:
    # Last write wins
    memory[decl.name] = decl.initial_value.value
    if self.debug:
      print(f"[DEBUG] {decl.name} = {decl.initial_value.value}")

  def _execute_print(self, stmt: PrintStatement, memory: Dict[str, int], output: List[str]) -> None:
    value = self.evaluate(stmt.expression, memory)
    try:
      line = format_output(value)
    except ValueError as e:
      # CPython refuses to format integers past its digit limit
      raise IncRuntimeError("Value too large to print.") from e
    output.append(line)
    self.emit(line)

  # ============================================================================
  # EXPRESSION EVALUATION
  # ============================================================================

  def evaluate(self, expr: Expression, memory: Dict[str, int]) -> int:
    """Evaluate an expression; never modifies memory"""
    increments = 0
    while isinstance(expr, IncrementCall):
      increments += 1
      expr = expr.argument
    if isinstance(expr, NumberLiteral):
      return expr.value + increments
    if isinstance(expr, Identifier):
      if expr.name not in memory:
        raise IncRuntimeError(f"Variable '{expr.name}' used before assignment.", expr.name)
      return memory[expr.name] + increments
    raise IncRuntimeError("Unknown expression type.")


# ============================================================================
# FACTORY FUNCTIONS (for main.py)
# ============================================================================

def create_interpreter(debug: bool = False, emit: Callable[[str], None] = print) -> Interpreter:
  """Create an interpreter writing output lines through emit"""
  return Interpreter(debug=debug, emit=emit)


def create_debug_interpreter(emit: Callable[[str], None] = print) -> Interpreter:
  """Create an interpreter with debug enabled"""
  return Interpreter(debug=True, emit=emit)
