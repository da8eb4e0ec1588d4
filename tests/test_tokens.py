"""Test operator, grouping, number, and invalid tokens."""

from arithcalc.lexer import Lexer, scan, tokenize
from arithcalc.tokens import TokenType

from tests.conftest import assert_positions, assert_types


class TestOperators:
    def test_single_char_operators(self, lex):
        tokens = lex("+-/()")
        assert_types(
            tokens,
            [TokenType.PLUS, TokenType.MINUS, TokenType.SLASH, TokenType.LPAREN, TokenType.RPAREN],
        )

    def test_star(self, lex):
        tokens = lex("*")
        assert_types(tokens, [TokenType.STAR])
        assert tokens[0].raw == "*"

    def test_pow(self, lex):
        tokens = lex("**")
        assert_types(tokens, [TokenType.POW])
        assert tokens[0].raw == "**"
        assert tokens[0].start_pos == 1

    def test_three_stars(self, lex):
        tokens = lex("***")
        assert_types(tokens, [TokenType.POW, TokenType.STAR])
        assert_positions(tokens, [1, 3])

    def test_star_space_star_is_two_stars(self, lex):
        tokens = lex("* *")
        assert_types(tokens, [TokenType.STAR, TokenType.STAR])

    def test_pow_position_is_first_star(self, lex):
        tokens = lex("2 ** 3")
        assert_positions(tokens, [1, 3, 6])


class TestNumbers:
    def test_integer(self, lex):
        tokens = lex("42")
        assert_types(tokens, [TokenType.NUMBER])
        assert tokens[0].value == 42.0
        assert tokens[0].raw == "42"

    def test_decimal(self, lex):
        tokens = lex("3.25")
        assert tokens[0].value == 3.25

    def test_leading_dot(self, lex):
        tokens = lex(".5")
        assert_types(tokens, [TokenType.NUMBER])
        assert tokens[0].value == 0.5

    def test_trailing_dot(self, lex):
        tokens = lex("7.")
        assert_types(tokens, [TokenType.NUMBER])
        assert tokens[0].value == 7.0

    def test_exponent(self, lex):
        tokens = lex("1.5e3")
        assert_types(tokens, [TokenType.NUMBER])
        assert tokens[0].value == 1500.0

    def test_signed_exponent(self, lex):
        tokens = lex("25E-2")
        assert tokens[0].value == 0.25
        assert tokens[0].raw == "25E-2"

    def test_exponent_without_digits_is_not_consumed(self, lex):
        tokens = lex("2e+")
        assert_types(tokens, [TokenType.NUMBER, TokenType.INVALID, TokenType.PLUS])
        assert tokens[0].raw == "2"
        assert_positions(tokens, [1, 2, 3])

    def test_second_dot_starts_new_literal(self, lex):
        tokens = lex("1.2.3")
        assert_types(tokens, [TokenType.NUMBER, TokenType.NUMBER])
        assert [t.value for t in tokens] == [1.2, 0.3]
        assert_positions(tokens, [1, 4])

    def test_sign_is_not_part_of_literal(self, lex):
        tokens = lex("-5")
        assert_types(tokens, [TokenType.MINUS, TokenType.NUMBER])

    def test_hex_prefix_is_not_a_literal(self, lex):
        tokens = lex("0x1A")
        assert_types(tokens, [TokenType.NUMBER, TokenType.INVALID, TokenType.NUMBER, TokenType.INVALID])
        assert tokens[0].value == 0.0


class TestInvalid:
    def test_lone_dot(self, lex):
        tokens = lex(".")
        assert_types(tokens, [TokenType.INVALID])
        assert tokens[0].raw == "."

    def test_dot_then_operator(self, lex):
        tokens = lex(".+1")
        assert_types(tokens, [TokenType.INVALID, TokenType.PLUS, TokenType.NUMBER])

    def test_unknown_character(self, lex):
        tokens = lex("@")
        assert_types(tokens, [TokenType.INVALID])
        assert tokens[0].start_pos == 1

    def test_invalid_consumes_one_character(self, lex):
        tokens = lex("ab")
        assert_types(tokens, [TokenType.INVALID, TokenType.INVALID])
        assert_positions(tokens, [1, 2])

    def test_unicode_digit_is_invalid(self, lex):
        tokens = lex("²")
        assert_types(tokens, [TokenType.INVALID])

    def test_overflowing_literal_is_invalid(self, lex):
        tokens = lex("1e999 + 1")
        assert_types(tokens, [TokenType.INVALID, TokenType.PLUS, TokenType.NUMBER])
        assert tokens[0].raw == "1e999"


class TestEnd:
    def test_empty_source(self):
        tokens = tokenize("")
        assert_types(tokens, [TokenType.END])
        assert tokens[0].start_pos == 1
        assert tokens[0].raw == ""

    def test_end_after_trailing_whitespace(self):
        tokens = tokenize("1  \n")
        assert tokens[-1].type == TokenType.END
        assert tokens[-1].start_pos == 5

    def test_end_is_repeated(self):
        lexer = Lexer("1")
        lexer.next_token()
        assert lexer.next_token().type == TokenType.END
        assert lexer.next_token().type == TokenType.END


class TestScan:
    def test_scan_returns_advanced_offset(self):
        tok, offset = scan("  12+3")
        assert tok.type == TokenType.NUMBER
        assert tok.start_pos == 3
        assert offset == 4

    def test_scan_from_offset(self):
        tok, offset = scan("12+3", 2)
        assert tok.type == TokenType.PLUS
        assert tok.start_pos == 3
        assert offset == 3

    def test_scan_is_pure(self):
        assert scan("1 ** 2", 1) == scan("1 ** 2", 1)

    def test_end_pos(self):
        tok, _ = scan("  123")
        assert tok.end_pos == 6
