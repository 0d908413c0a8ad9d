"""Go literal tokenizer - lexes expression text into a flat token list.

Covers the subset the emitter produces: identifiers, decimal int, float and
imaginary literals, interpreted and raw strings, and punctuation.
"""

from __future__ import annotations


# Token type constants
TK_INT = "INT"
TK_FLOAT = "FLOAT"
TK_IMAG = "IMAG"
TK_STRING = "STRING"
TK_IDENT = "IDENT"
TK_OP = "OP"
TK_EOF = "EOF"

KEYWORDS: set[str] = {
    "chan",
    "func",
    "interface",
    "map",
    "return",
    "struct",
}

SINGLE_OPS: set[str] = {
    "(",
    ")",
    "[",
    "]",
    "{",
    "}",
    ",",
    ":",
    ";",
    ".",
    "&",
    "*",
    "+",
    "-",
}

ESCAPE_MAP: dict[str, str] = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    '"': '"',
}

# Hex digits following \x, \u and \U.
HEX_ESCAPES: dict[str, int] = {"x": 2, "u": 4, "U": 8}


class TokenizeError(Exception):
    """Error during tokenization."""

    def __init__(self, msg: str, line: int, col: int):
        self.msg: str = msg
        self.line: int = line
        self.col: int = col
        super().__init__(msg + " at line " + str(line) + " col " + str(col))


class Token:
    """A token with type, source text, and position."""

    def __init__(self, type_: str, value: str, line: int, col: int):
        self.type: str = type_
        self.value: str = value
        self.line: int = line
        self.col: int = col

    def __repr__(self) -> str:
        return "Token(" + self.type + ", " + repr(self.value) + ", " + str(self.line) + ", " + str(self.col) + ")"


def _is_digit(c: str) -> bool:
    return c >= "0" and c <= "9"


def _is_hex(c: str) -> bool:
    return (c >= "0" and c <= "9") or (c >= "a" and c <= "f") or (c >= "A" and c <= "F")


def _is_alpha(c: str) -> bool:
    return (c >= "a" and c <= "z") or (c >= "A" and c <= "Z") or c == "_" or (c > "\x7f" and c.isalpha())


def _is_alnum(c: str) -> bool:
    return _is_alpha(c) or _is_digit(c)


def unquote(text: str, line: int = 1, col: int = 1) -> str:
    """Decode a Go string literal (interpreted or raw) to its text.

    \\x escapes outside ASCII are decoded as bytes, so byte sequences the
    quoter produced for lone surrogates come back as those surrogates.
    """
    if text.startswith("`"):
        return text[1:-1].replace("\r", "")
    out = bytearray()
    pos = 1
    end = len(text) - 1
    while pos < end:
        c = text[pos]
        if c != "\\":
            out += c.encode("utf-8", "surrogatepass")
            pos += 1
            continue
        pos += 1
        if pos >= end:
            raise TokenizeError("unexpected end of string in escape", line, col)
        c = text[pos]
        if c in ESCAPE_MAP:
            out += ESCAPE_MAP[c].encode("utf-8")
            pos += 1
        elif c in HEX_ESCAPES:
            n = HEX_ESCAPES[c]
            digits = text[pos + 1 : pos + 1 + n]
            if len(digits) != n or not all(_is_hex(d) for d in digits):
                raise TokenizeError("invalid \\" + c + " escape", line, col)
            val = int(digits, 16)
            if c == "x":
                out.append(val)
            else:
                if val > 0x10FFFF or 0xD800 <= val <= 0xDFFF:
                    raise TokenizeError("escape is invalid Unicode code point", line, col)
                out += chr(val).encode("utf-8")
            pos += 1 + n
        elif c >= "0" and c <= "7":
            digits = text[pos : pos + 3]
            if len(digits) != 3 or not all(d >= "0" and d <= "7" for d in digits):
                raise TokenizeError("invalid octal escape", line, col)
            val = int(digits, 8)
            if val > 255:
                raise TokenizeError("octal escape value > 255", line, col)
            out.append(val)
            pos += 3
        else:
            raise TokenizeError("unknown escape sequence: \\" + c, line, col)
    return out.decode("utf-8", "surrogatepass")


def tokenize(source: str) -> list[Token]:
    """Tokenize Go expression source into a flat list ending with TK_EOF."""
    tokens: list[Token] = []
    pos = 0
    line = 1
    col = 1
    length = len(source)

    while pos < length:
        c = source[pos]

        # Newlines
        if c == "\n":
            pos += 1
            line += 1
            col = 1
            continue

        # Whitespace
        if c == " " or c == "\t" or c == "\r":
            pos += 1
            col += 1
            continue

        # Line comment: //
        if c == "/" and pos + 1 < length and source[pos + 1] == "/":
            while pos < length and source[pos] != "\n":
                pos += 1
            continue

        start_pos = pos
        start_line = line
        start_col = col

        # Number: int, float, or imaginary
        if _is_digit(c):
            while pos < length and _is_digit(source[pos]):
                pos += 1
            is_float = False
            if pos < length and source[pos] == ".":
                is_float = True
                pos += 1
                while pos < length and _is_digit(source[pos]):
                    pos += 1
            if pos < length and (source[pos] == "e" or source[pos] == "E"):
                is_float = True
                pos += 1
                if pos < length and (source[pos] == "+" or source[pos] == "-"):
                    pos += 1
                if pos >= length or not _is_digit(source[pos]):
                    raise TokenizeError("exponent has no digits", start_line, start_col)
                while pos < length and _is_digit(source[pos]):
                    pos += 1
            kind = TK_FLOAT if is_float else TK_INT
            if pos < length and source[pos] == "i":
                kind = TK_IMAG
                pos += 1
            raw = source[start_pos:pos]
            if kind == TK_INT and len(raw) > 1 and raw[0] == "0":
                if not all(d >= "0" and d <= "7" for d in raw):
                    raise TokenizeError("invalid digit in octal literal", start_line, start_col)
            col += pos - start_pos
            tokens.append(Token(kind, raw, start_line, start_col))
            continue

        # Interpreted string: "..."
        if c == '"':
            pos += 1
            while pos < length and source[pos] != '"':
                if source[pos] == "\n":
                    raise TokenizeError("string literal not terminated", start_line, start_col)
                if source[pos] == "\\":
                    pos += 1
                pos += 1
            if pos >= length:
                raise TokenizeError("string literal not terminated", start_line, start_col)
            pos += 1  # skip closing "
            raw = source[start_pos:pos]
            unquote(raw, start_line, start_col)
            col += pos - start_pos
            tokens.append(Token(TK_STRING, raw, start_line, start_col))
            continue

        # Raw string: `...`
        if c == "`":
            end = source.find("`", pos + 1)
            if end < 0:
                raise TokenizeError("raw string literal not terminated", start_line, start_col)
            raw = source[start_pos : end + 1]
            newlines = raw.count("\n")
            if newlines:
                line += newlines
                col = len(raw) - raw.rfind("\n")
            else:
                col += len(raw)
            pos = end + 1
            tokens.append(Token(TK_STRING, raw, start_line, start_col))
            continue

        # Identifier or keyword
        if _is_alpha(c):
            while pos < length and _is_alnum(source[pos]):
                pos += 1
            word = source[start_pos:pos]
            col += pos - start_pos
            if word in KEYWORDS:
                tokens.append(Token(word, word, start_line, start_col))
            else:
                tokens.append(Token(TK_IDENT, word, start_line, start_col))
            continue

        if c in SINGLE_OPS:
            tokens.append(Token(TK_OP, c, start_line, start_col))
            pos += 1
            col += 1
            continue

        raise TokenizeError("unexpected character: " + repr(c), line, col)

    tokens.append(Token(TK_EOF, "", line, col))
    return tokens
