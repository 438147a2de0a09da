"""
Lexer tests for the inc language
"""

import pytest
from parsing import Lexer, Token, TokenType, tokenize


def kinds(source):
  return [token.type for token in tokenize(source)]


class TestTokenKinds:
  """Classification of lexemes into token kinds"""

  def test_declaration_tokens(self):
    """Test the tokens of a declaration"""
    assert tokenize("x=10;") == [
        Token(TokenType.IDENTIFIER, "x", 1),
        Token(TokenType.ASSIGN, "=", 1),
        Token(TokenType.NUMBER, "10", 1),
        Token(TokenType.SEMICOLON, ";", 1),
        Token(TokenType.END_OF_FILE, "", 1),
    ]

  def test_print_with_increment(self):
    """Test the tokens of a print of an inc call"""
    assert kinds("print(inc(x));") == [
        TokenType.PRINT, TokenType.LPAREN, TokenType.INC, TokenType.LPAREN,
        TokenType.IDENTIFIER, TokenType.RPAREN, TokenType.RPAREN,
        TokenType.SEMICOLON, TokenType.END_OF_FILE,
    ]

  def test_keywords_need_exact_match(self):
    """Test that keywords only match whole words"""
    tokens = tokenize("incx print2 inc_ prints")
    assert [t.type for t in tokens[:-1]] == [TokenType.IDENTIFIER] * 4
    assert [t.lexeme for t in tokens[:-1]] == ["incx", "print2", "inc_", "prints"]

  def test_identifier_with_digits_and_underscores(self):
    """Test identifiers containing digits and underscores"""
    token = tokenize("a_1_b2")[0]
    assert token == Token(TokenType.IDENTIFIER, "a_1_b2", 1)

  def test_number_followed_by_letters_splits(self):
    """Test that a number stops at the first letter"""
    tokens = tokenize("12ab")
    assert tokens[0] == Token(TokenType.NUMBER, "12", 1)
    assert tokens[1] == Token(TokenType.IDENTIFIER, "ab", 1)

  def test_minus_sign_is_not_part_of_number(self):
    """Test that literals carry no sign"""
    tokens = tokenize("-5")
    assert tokens[0] == Token(TokenType.UNKNOWN, "-", 1)
    assert tokens[1] == Token(TokenType.NUMBER, "5", 1)

  @pytest.mark.parametrize("char", ["@", "+", "_", "#", "."])
  def test_unknown_characters(self, char):
    """Test that unrecognized characters become UNKNOWN tokens"""
    assert tokenize(char)[0] == Token(TokenType.UNKNOWN, char, 1)

  def test_leading_underscore_is_unknown_then_identifier(self):
    """Test that identifiers must start with a letter"""
    tokens = tokenize("_a")
    assert tokens[0].type == TokenType.UNKNOWN
    assert tokens[1] == Token(TokenType.IDENTIFIER, "a", 1)


class TestWhitespaceAndLines:
  """Whitespace skipping and line counting"""

  def test_spaces_tabs_and_carriage_returns_are_skipped(self):
    """Test skipping of spaces, tabs and carriage returns"""
    assert kinds("x \t=\r 1 ;") == [
        TokenType.IDENTIFIER, TokenType.ASSIGN, TokenType.NUMBER,
        TokenType.SEMICOLON, TokenType.END_OF_FILE,
    ]

  def test_newlines_advance_line(self):
    """Test line numbers across newlines"""
    tokens = tokenize("x=1;\nprint(x);\r\n\nprint(x);")
    print_lines = [t.line for t in tokens if t.type == TokenType.PRINT]
    assert print_lines == [2, 4]

  def test_end_of_file_line_counts_trailing_newlines(self):
    """Test the line of the END_OF_FILE token"""
    assert tokenize("x=1;\n\n")[-1] == Token(TokenType.END_OF_FILE, "", 3)

  def test_tab_does_not_shift_line_numbers(self):
    """Test that tabs do not disturb line numbers"""
    tokens = tokenize("\tx=1;\n\tprint(x);")
    assert tokens[4] == Token(TokenType.PRINT, "print", 2)


class TestStream:
  """Pull contract of the lexer"""

  def test_empty_source(self):
    """Test that empty source gives END_OF_FILE at once"""
    lexer = Lexer("")
    assert lexer.next_token() == Token(TokenType.END_OF_FILE, "", 1)

  def test_whitespace_only_source(self):
    """Test source made of whitespace only"""
    assert tokenize("  \n\t ") == [Token(TokenType.END_OF_FILE, "", 2)]

  def test_end_of_file_repeats(self):
    """Test that END_OF_FILE is returned indefinitely"""
    lexer = Lexer("x")
    assert lexer.next_token().type == TokenType.IDENTIFIER
    for _ in range(3):
      assert lexer.next_token() == Token(TokenType.END_OF_FILE, "", 1)

  def test_iteration_stops_after_end_of_file(self):
    """Test that iteration ends with END_OF_FILE"""
    tokens = list(Lexer("print(1);"))
    assert tokens[-1].type == TokenType.END_OF_FILE
    assert len(tokens) == 6

  def test_stream_is_not_restartable(self):
    """Test that a consumed lexer stays consumed"""
    lexer = Lexer("x=1;")
    first = list(lexer)
    assert len(first) == 5
    assert list(lexer) == [Token(TokenType.END_OF_FILE, "", 1)]

  def test_tokens_are_immutable(self):
    """Test that tokens cannot be modified"""
    token = tokenize("x")[0]
    with pytest.raises(AttributeError):
      token.lexeme = "y"
