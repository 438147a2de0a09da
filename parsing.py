"""
inc language lexer and parser
Token and syntax tree definitions, a pyparsing-driven lazy lexer and a
recursive-descent parser with single-token lookahead
"""

from typing import Dict, Iterator, List, Tuple, Union
from dataclasses import dataclass, fields, is_dataclass
from enum import Enum

# Import pyparsing with error handling
try:
    from pyparsing import Word, alphas, alphanums, nums, Char, Regex, ParserElement, lineno
except ImportError:
    raise ImportError("pyparsing library not found. Install with: pip install pyparsing")

from error_handling import IncSyntaxError


# ============================================================================
# TOKENS
# ============================================================================

class TokenType(Enum):
    INC = "INC"
    PRINT = "PRINT"
    ASSIGN = "ASSIGN"
    SEMICOLON = "SEMICOLON"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    NUMBER = "NUMBER"
    IDENTIFIER = "IDENTIFIER"
    END_OF_FILE = "END_OF_FILE"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class Token:
    """Lexical token with its source line (1-based)"""
    type: TokenType
    lexeme: str
    line: int

    def __str__(self) -> str:
        return f"{self.type.value}({self.lexeme!r}) @ line {self.line}"


KEYWORDS: Dict[str, TokenType] = {
    "inc": TokenType.INC,
    "print": TokenType.PRINT,
}

PUNCTUATION: Dict[str, TokenType] = {
    "=": TokenType.ASSIGN,
    ";": TokenType.SEMICOLON,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
}


# ============================================================================
# SYNTAX TREE
# ============================================================================

@dataclass(frozen=True)
class NumberLiteral:
    value: int


@dataclass(frozen=True)
class Identifier:
    name: str


@dataclass(frozen=True)
class IncrementCall:
    argument: 'Expression'


@dataclass(frozen=True)
class VariableDeclaration:
    """`name = <number>;` - the initializer is always a literal"""
    name: str
    initial_value: NumberLiteral


@dataclass(frozen=True)
class PrintStatement:
    expression: 'Expression'


@dataclass(frozen=True)
class Program:
    statements: Tuple['Statement', ...] = ()


Expression = Union[NumberLiteral, Identifier, IncrementCall]
Statement = Union[VariableDeclaration, PrintStatement]
Node = Union[Expression, Statement, Program]


# ============================================================================
# LEXER
# ============================================================================

def _word_action(s: str, loc: int, toks) -> Token:
    lexeme = toks[0]
    return Token(KEYWORDS.get(lexeme, TokenType.IDENTIFIER), lexeme, lineno(loc, s))


def _number_action(s: str, loc: int, toks) -> Token:
    return Token(TokenType.NUMBER, toks[0], lineno(loc, s))


def _punctuation_action(s: str, loc: int, toks) -> Token:
    return Token(PUNCTUATION[toks[0]], toks[0], lineno(loc, s))


def _unknown_action(s: str, loc: int, toks) -> Token:
    return Token(TokenType.UNKNOWN, toks[0], lineno(loc, s))


def build_token_pattern() -> ParserElement:
    """Build the pattern matching exactly one token at the scan position"""
    word = Word(alphas, alphanums + "_").set_parse_action(_word_action)
    number = Word(nums).set_parse_action(_number_action)
    punctuation = Char("".join(PUNCTUATION)).set_parse_action(_punctuation_action)
    # Anything else is deferred to the parser as a one-character UNKNOWN token
    unknown = Regex(r".").set_parse_action(_unknown_action)

    pattern = word | number | punctuation | unknown
    pattern.set_whitespace_chars(" \t\r\n")
    # Keep tabs so scan locations line up with the source text
    pattern.parse_with_tabs()
    return pattern


TOKEN_PATTERN = build_token_pattern()


class Lexer:
    """Pull-based lexer producing a lazy, finite, non-restartable token stream"""

    def __init__(self, source: str):
        self.source = source
        self._scanner = TOKEN_PATTERN.scan_string(source)
        self._exhausted = False
        self._end_line = lineno(len(source), source)

    def next_token(self) -> Token:
        """Return the next token; END_OF_FILE is repeated once the input is consumed"""
        if not self._exhausted:
            match = next(self._scanner, None)
            if match is not None:
                tokens, _start, _end = match
                return tokens[0]
            self._exhausted = True
        return Token(TokenType.END_OF_FILE, "", self._end_line)

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            yield token
            if token.type is TokenType.END_OF_FILE:
                return


def tokenize(source: str) -> List[Token]:
    """Tokenize a whole source string, END_OF_FILE token included"""
    return list(Lexer(source))


# ============================================================================
# PARSER
# ============================================================================

class Parser:
    """Recursive-descent parser over a Lexer

    Grammar:
        program       := statement*
        statement     := identifier '=' number ';'
                       | 'print' '(' expression ')' ';'
        expression    := number | identifier | incrementCall
        incrementCall := 'inc' '(' expression ')'
    """

    def __init__(self, lexer: Lexer, debug: bool = False):
        self.lexer = lexer
        self.debug = debug
        self.current_token = lexer.next_token()

    def _advance(self) -> None:
        self.current_token = self.lexer.next_token()

    def _check(self, token_type: TokenType) -> bool:
        return self.current_token.type is token_type

    def _error(self, expected: str) -> IncSyntaxError:
        return IncSyntaxError(expected, self.current_token.lexeme, self.current_token.line)

    def _consume(self, token_type: TokenType, expected: str) -> Token:
        if not self._check(token_type):
            raise self._error(expected)
        token = self.current_token
        self._advance()
        return token

    def parse(self) -> Program:
        """Parse the whole token stream into a Program"""
        statements = []
        while not self._check(TokenType.END_OF_FILE):
            statement = self.parse_statement()
            if self.debug:
                print(f"[DEBUG] Parsed {type(statement).__name__}")
            statements.append(statement)
        return Program(tuple(statements))

    def parse_statement(self) -> Statement:
        if self._check(TokenType.IDENTIFIER):
            return self.parse_declaration()
        if self._check(TokenType.PRINT):
            return self.parse_print_statement()
        raise self._error("Expected statement")

    def parse_declaration(self) -> VariableDeclaration:
        name = self._consume(TokenType.IDENTIFIER, "Expected variable name")
        self._consume(TokenType.ASSIGN, "Expected '='")
        value = self._number_literal(self._consume(TokenType.NUMBER, "Expected number"))
        self._consume(TokenType.SEMICOLON, "Expected ';'")
        return VariableDeclaration(name.lexeme, value)

    def parse_print_statement(self) -> PrintStatement:
        self._consume(TokenType.PRINT, "Expected 'print'")
        self._consume(TokenType.LPAREN, "Expected '('")
        expression = self.parse_expression()
        self._consume(TokenType.RPAREN, "Expected ')'")
        self._consume(TokenType.SEMICOLON, "Expected ';'")
        return PrintStatement(expression)

    def parse_expression(self) -> Expression:
        """Parse an expression; `inc(` chains are unrolled into a loop"""
        depth = 0
        while self._check(TokenType.INC):
            self._consume(TokenType.INC, "Expected 'inc'")
            self._consume(TokenType.LPAREN, "Expected '('")
            depth += 1

        expression = self.parse_operand()
        for _ in range(depth):
            self._consume(TokenType.RPAREN, "Expected ')'")
            expression = IncrementCall(expression)
        return expression

    def parse_operand(self) -> Expression:
        if self._check(TokenType.NUMBER):
            return self._number_literal(self._consume(TokenType.NUMBER, "Expected number"))
        if self._check(TokenType.IDENTIFIER):
            return Identifier(self._consume(TokenType.IDENTIFIER, "Expected identifier").lexeme)
        raise self._error("Expected expression")

    def _number_literal(self, token: Token) -> NumberLiteral:
        try:
            return NumberLiteral(int(token.lexeme))
        except ValueError as e:
            # CPython refuses to convert very long digit strings
            raise IncSyntaxError("Expected number within the integer conversion limit",
                                 token.lexeme, token.line) from e


class IncParser:
    """Main parser entry point: builds a fresh Lexer and Parser per call"""

    def __init__(self, debug: bool = False):
        self.debug = debug

    def parse_string(self, text: str) -> Program:
        """Parse inc source code from a string"""
        if self.debug:
            print(f"[DEBUG] Parsing {len(text)} characters")
        return Parser(Lexer(text), self.debug).parse()

    def parse_file(self, filepath: str) -> Program:
        """Parse an inc source file"""
        with open(filepath, 'r', encoding='utf-8') as f:
            content = f.read()
        return self.parse_string(content)

    def tokenize(self, text: str) -> List[Token]:
        """Tokenize inc source code"""
        return tokenize(text)


# Factory functions for creating parsers
def create_parser(debug: bool = False) -> IncParser:
    """Create an inc parser"""
    return IncParser(debug=debug)


def create_debug_parser() -> IncParser:
    """Create an inc parser with debug enabled"""
    return IncParser(debug=True)


# Utility functions for working with the syntax tree
def pretty_print_ast(node: Node, indent: int = 0) -> str:
    """Pretty print a syntax tree node for debugging"""
    lines = []
    # Explicit stack so long inc(...) chains do not hit the recursion limit
    stack = [(node, indent)]
    while stack:
        current, depth = stack.pop()
        values = []
        children = []
        for field in fields(current):
            value = getattr(current, field.name)
            if isinstance(value, tuple):
                children.extend(value)
            elif is_dataclass(value):
                children.append(value)
            else:
                values.append(repr(value))

        line = "  " * depth + type(current).__name__
        if values:
            line += f"({', '.join(values)})"
        lines.append(line + "\n")

        for child in reversed(children):
            stack.append((child, depth + 1))

    return "".join(lines)
