"""
Error types and error reporting for the inc language pipeline
Each pipeline stage raises exactly one kind of error
"""

from typing import Optional


# ============================================================================
# EXCEPTION CLASSES
# ============================================================================

class IncError(Exception):
    """Base class for every error raised by the pipeline"""
    kind = "Inc"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class IncSyntaxError(IncError):
    """Grammar violation, raised only by the parser"""
    kind = "Syntax"

    def __init__(self, expected: str, found: str, line: int):
        self.expected = expected
        self.found = found
        self.line = line
        super().__init__(f"Syntax Error: {expected} (Found '{found}') at line {line}")


class IncSemanticError(IncError):
    """Reference to an undeclared variable, raised only by the semantic analyzer"""
    kind = "Semantic"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Semantic Error: Variable '{name}' is undeclared.")


class IncRuntimeError(IncError):
    """Execution failure, raised only by the interpreter"""
    kind = "Runtime"

    def __init__(self, message: str, name: Optional[str] = None):
        self.name = name
        super().__init__(f"Runtime Error: {message}")


# ============================================================================
# PURE FUNCTIONS
# ============================================================================

def get_context_lines(source_text: str, line_num: int, context_lines: int = 1) -> str:
    """Get numbered source lines around an error line, marking the error line"""
    lines = source_text.split('\n')
    start_line = max(0, line_num - context_lines - 1)
    end_line = min(len(lines), line_num + context_lines)

    context_parts = []
    for i in range(start_line, end_line):
        marker = ">" if i == line_num - 1 else " "
        context_parts.append(f"{marker}{i+1:4d}: {lines[i]}")

    return '\n'.join(context_parts)


def describe_error(error: IncError, source_text: Optional[str] = None) -> str:
    """Format an error for display, adding source context for syntax errors"""
    result = str(error)
    if isinstance(error, IncSyntaxError) and source_text:
        context = get_context_lines(source_text, error.line)
        if context:
            result += f"\n  Context:\n{context}"
    return result
