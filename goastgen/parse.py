"""Go literal parser - recursive descent, one method per grammar production.

Reads back the expressions the emitter writes and produces the same IR, so
a rendered tree can be checked by parsing it again.
"""

from __future__ import annotations

from .ir import (
    ArrayType,
    BasicLit,
    Call,
    ComplexPair,
    CompositeLit,
    Expr,
    FieldGroup,
    FuncLit,
    Ident,
    InterfaceType,
    KeyValue,
    MapType,
    Param,
    PointerType,
    Selector,
    SliceType,
    StructType,
    TypeExpr,
    TypeName,
    UnaryRef,
)
from .tokens import (
    TK_EOF,
    TK_FLOAT,
    TK_IDENT,
    TK_IMAG,
    TK_INT,
    TK_STRING,
    Token,
    tokenize,
    unquote,
)

# Token types that start a type literal.
TYPE_STARTS: set[str] = {"[", "map", "struct", "interface"}

LIT_KINDS: dict[str, str] = {
    TK_INT: "int",
    TK_FLOAT: "float",
    TK_IMAG: "imag",
    TK_STRING: "string",
}


class ParseError(Exception):
    """Parse error with location info."""

    def __init__(self, msg: str, line: int, col: int):
        self.msg: str = msg
        self.line: int = line
        self.col: int = col
        super().__init__(msg + " at line " + str(line) + " col " + str(col))


class Parser:
    """Recursive descent parser for Go literal expressions."""

    def __init__(self, tokens: list[Token]):
        self.tokens: list[Token] = tokens
        self.pos: int = 0

    # ── Helpers ──────────────────────────────────────────────

    def current(self) -> Token:
        return self.tokens[self.pos]

    def peek(self, offset: int) -> Token:
        idx = self.pos + offset
        if idx >= len(self.tokens):
            return self.tokens[len(self.tokens) - 1]
        return self.tokens[idx]

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def at(self, value: str) -> bool:
        tok = self.current()
        return tok.value == value and tok.type != TK_STRING

    def at_type(self, type_: str) -> bool:
        return self.current().type == type_

    def expect(self, value: str) -> Token:
        tok = self.current()
        if not self.at(value):
            raise self.error("expected '" + value + "', got '" + tok.value + "'")
        return self.advance()

    def expect_ident(self) -> Token:
        tok = self.current()
        if tok.type != TK_IDENT:
            raise self.error("expected identifier, got '" + tok.value + "'")
        return self.advance()

    def error(self, msg: str) -> ParseError:
        tok = self.current()
        return ParseError(msg, tok.line, tok.col)

    # ── Top Level ────────────────────────────────────────────

    def parse_source(self) -> Expr:
        expr = self.parse_expr()
        if not self.at_type(TK_EOF):
            raise self.error("unexpected '" + self.current().value + "' after expression")
        return expr

    # ── Expressions ──────────────────────────────────────────

    def parse_expr(self) -> Expr:
        """Expr = '&' Primary | '-' NumberLit | Primary"""
        if self.at("&"):
            self.advance()
            return UnaryRef(self.parse_primary())
        if self.at("-"):
            self.advance()
            tok = self.current()
            if tok.type != TK_INT and tok.type != TK_FLOAT:
                raise self.error("unary minus applies only to int and float literals")
            self.advance()
            return BasicLit(LIT_KINDS[tok.type], "-" + tok.value)
        return self.parse_primary()

    def parse_primary(self) -> Expr:
        """Primary = Operand ( Call | Selector | CompositeBody )*"""
        x = self.parse_operand()
        while True:
            if self.at("("):
                x = Call(x, self.parse_args())
            elif self.at(".") and isinstance(x, Expr):
                self.advance()
                x = Selector(x, self.expect_ident().value)
            elif self.at("{") and isinstance(x, TypeExpr):
                if isinstance(x, (PointerType, InterfaceType)):
                    raise self.error("invalid composite literal type")
                x = CompositeLit(x, self.parse_elements())
            else:
                break
        if isinstance(x, TypeExpr):
            raise self.error("type is not an expression")
        return x

    def parse_operand(self) -> Expr | TypeExpr:
        tok = self.current()
        if tok.type in LIT_KINDS:
            self.advance()
            return BasicLit(LIT_KINDS[tok.type], tok.value)
        if tok.type == TK_IDENT:
            self.advance()
            if self.at("{"):
                return TypeName(tok.value)
            return Ident(tok.value)
        if self.at("func"):
            return self.parse_func_lit()
        if self.at("(") and self.peek(1).value == "*":
            self.advance()
            typ = self.parse_type()
            self.expect(")")
            return typ
        if self.at("("):
            return self.parse_paren()
        if tok.value in TYPE_STARTS and tok.type != TK_STRING:
            return self.parse_type()
        raise self.error("expected expression, got '" + tok.value + "'")

    def parse_paren(self) -> Expr:
        """Paren = '(' Expr ')' | '(' RealLit ('+' | '-') ImagLit ')'"""
        self.expect("(")
        inner = self.parse_expr()
        if (self.at("+") or self.at("-")) and isinstance(inner, BasicLit):
            if inner.kind != "int" and inner.kind != "float":
                raise self.error("complex constant needs a real part")
            op = self.advance().value
            tok = self.current()
            if tok.type != TK_IMAG:
                raise self.error("expected imaginary literal, got '" + tok.value + "'")
            self.advance()
            self.expect(")")
            return ComplexPair(inner, "+" if op == "+" else "-", BasicLit("imag", tok.value))
        self.expect(")")
        return inner

    def parse_args(self) -> tuple[Expr, ...]:
        self.expect("(")
        args: list[Expr] = []
        while not self.at(")"):
            args.append(self.parse_expr())
            if not self.at(")"):
                self.expect(",")
        self.expect(")")
        return tuple(args)

    def parse_elements(self) -> tuple[Expr, ...]:
        """CompositeBody = '{' ( Element ( ',' Element )* ','? )? '}'"""
        self.expect("{")
        elements: list[Expr] = []
        while not self.at("}"):
            elem = self.parse_expr()
            if self.at(":"):
                self.advance()
                elem = KeyValue(elem, self.parse_expr())
            elements.append(elem)
            if not self.at("}"):
                self.expect(",")
        self.expect("}")
        return tuple(elements)

    def parse_func_lit(self) -> FuncLit:
        """FuncLit = 'func' '(' ParamList ')' Type '{' 'return' Expr ';'? '}'"""
        self.expect("func")
        self.expect("(")
        params: list[Param] = []
        while not self.at(")"):
            names = [self.expect_ident().value]
            while self.at(","):
                self.advance()
                names.append(self.expect_ident().value)
            typ = self.parse_type()
            for name in names:
                params.append(Param(name, typ))
            if not self.at(")"):
                self.expect(",")
        self.expect(")")
        result = self.parse_type()
        self.expect("{")
        self.expect("return")
        body = self.parse_expr()
        if self.at(";"):
            self.advance()
        self.expect("}")
        return FuncLit(tuple(params), result, body)

    # ── Types ────────────────────────────────────────────────

    def parse_type(self) -> TypeExpr:
        """Parse a single type expression."""
        tok = self.current()
        if tok.type == TK_IDENT:
            self.advance()
            return TypeName(tok.value)
        if self.at("*"):
            self.advance()
            return PointerType(self.parse_type())
        if self.at("["):
            self.advance()
            if self.at("]"):
                self.advance()
                return SliceType(self.parse_type())
            length = self.current()
            if length.type != TK_INT:
                raise self.error("expected array length, got '" + length.value + "'")
            self.advance()
            self.expect("]")
            return ArrayType(int(length.value, 8 if length.value.startswith("0") else 10), self.parse_type())
        if self.at("map"):
            self.advance()
            self.expect("[")
            key = self.parse_type()
            self.expect("]")
            return MapType(key, self.parse_type())
        if self.at("interface"):
            self.advance()
            self.expect("{")
            self.expect("}")
            return InterfaceType()
        if self.at("struct"):
            return self.parse_struct_type()
        if self.at("("):
            self.advance()
            typ = self.parse_type()
            self.expect(")")
            return typ
        if self.at("chan") or self.at("func"):
            raise self.error(tok.value + " types have no literal form")
        raise self.error("expected type, got '" + tok.value + "'")

    def parse_struct_type(self) -> StructType:
        """StructType = 'struct' '{' ( FieldGroup ( ';' FieldGroup )* ';'? )? '}'"""
        self.expect("struct")
        self.expect("{")
        groups: list[FieldGroup] = []
        while not self.at("}"):
            names = [self.expect_ident().value]
            while self.at(","):
                self.advance()
                names.append(self.expect_ident().value)
            typ = self.parse_type()
            tag = ""
            if self.at_type(TK_STRING):
                tok = self.advance()
                tag = unquote(tok.value, tok.line, tok.col)
            groups.append(FieldGroup(tuple(names), typ, tag))
            if not self.at("}"):
                self.expect(";")
        self.expect("}")
        return StructType(tuple(groups))


def parse(source: str) -> Expr:
    """Parse Go expression text into an Expr tree.

    Raises TokenizeError or ParseError on malformed input.
    """
    return Parser(tokenize(source)).parse_source()
