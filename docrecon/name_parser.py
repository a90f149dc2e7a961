"""Recursive-descent parser for member-id strings.

Names in generated documentation have a surprisingly rich grammar. It is
parsed in LL(1) with one token of lookahead:

    identifier     ::= qualified-path method-args-opt
    qualified-path ::= segment | segment '.' qualified-path
    segment        ::= segment-name arity-opt
    segment-name   ::= '#' NAME | '##' NAME | hashed-name
    hashed-name    ::= NAME | NAME '#' hashed-name
    arity-opt      ::= '`' NUMBER | '``' NUMBER |

    method-args-opt ::= '(' arg-list-opt ')' |
    arg-list        ::= arg out-opt | arg out-opt ',' arg-list
    out-opt         ::= '@' |
    arg             ::= arg-type arrays-opt
    arg-type        ::= type-path | '`' NUMBER | '``' NUMBER
    type-path       ::= type-name | type-name '.' type-path
    type-name       ::= NAME | NAME '{' generic-args '}'
    generic-args    ::= arg | arg ',' generic-args

    arrays-opt ::= array arrays-opt |
    array      ::= '[' dimensions-opt ']'
    dimensions ::= NUMBER ':' | NUMBER ':' ',' dimensions

Generic parameters declared in the path get synthetic names ``T1``, ``T2``,
... in declaration order. A back-reference such as `` `0 `` resolves against
the type-level list and ```` ``0 ```` against the member-level list.
"""

from docrecon.array_info import ArrayInfo
from docrecon.class_segment import ClassSegment
from docrecon.errors import BackReferenceError, NameLexError, NameParseError
from docrecon.identifier import Identifier
from docrecon.member_kind import MemberKind
from docrecon.name_flags import NameFlags, ParameterKind
from docrecon.name_lexer import NameLexer
from docrecon.name_token import NameToken, NameTokenKind
from docrecon.parameter import Parameter
from docrecon.populated_type import PopulatedName, PopulatedType

CONSTRUCTOR_NAME = "ctor"
MEMBER_ID_PREFIX_LEN = 2


class NameParser:
    """Parses one identifier string; create a fresh instance per string."""

    def __init__(self, text: str) -> None:
        """Prepare the lexer and the generic-parameter bookkeeping."""
        self.text = text
        self._lexer = NameLexer(text)
        self._type_parameter_names: list[str] = []
        self._method_type_parameter_names: list[str] = []
        self._declared_count = 0

    # -----------------------------
    # Entry points
    # -----------------------------

    def parse(self, *, is_method: bool = False) -> Identifier:
        """Parse the whole text as an identifier."""
        identifier = self._parse_qualified_path(is_method=is_method)
        identifier = identifier.with_parameters(self._parse_method_args_opt())
        self._expect(NameTokenKind.EOI, "Unknown garbage at end of name")
        return identifier

    def parse_type(
        self,
        type_parameters: list[str] | tuple[str, ...] = (),
        method_type_parameters: list[str] | tuple[str, ...] = (),
    ) -> PopulatedType:
        """Parse the whole text as a single argument type."""
        self._type_parameter_names = list(type_parameters)
        self._method_type_parameter_names = list(method_type_parameters)
        populated = self._parse_arg()
        self._expect(NameTokenKind.EOI, "Unknown garbage at end of type")
        return populated

    # -----------------------------
    # Qualified path
    # -----------------------------

    def _parse_qualified_path(self, *, is_method: bool) -> Identifier:
        segments = [self._parse_segment()]
        while self._next().kind is NameTokenKind.PERIOD:
            segments.append(self._parse_segment())
        self._lexer.unget()

        # The last segment is the name proper; the rest is the containing path.
        last = segments.pop()
        flags = (last.flags | NameFlags.METHOD) if is_method else last.flags
        return Identifier(tuple(segments), last.name, last.type_parameters, (), flags)

    def _parse_segment(self) -> ClassSegment:
        name, flags = self._parse_segment_name()

        tok = self._next()
        if tok.kind not in (NameTokenKind.BACKTICK, NameTokenKind.DOUBLE_BACKTICK):
            self._lexer.unget()
            return ClassSegment(name, (), flags)

        message = f"Count of generic arguments after {tok.text}"
        count = int(self._expect(NameTokenKind.NUMBER, message).text)
        target = (
            self._type_parameter_names
            if tok.kind is NameTokenKind.BACKTICK
            else self._method_type_parameter_names
        )
        declared = []
        for _ in range(count):
            self._declared_count += 1
            type_param = f"T{self._declared_count}"
            target.append(type_param)
            declared.append(type_param)
        return ClassSegment(name, tuple(declared), flags)

    def _parse_segment_name(self) -> tuple[str, NameFlags]:
        tok = self._next()

        if tok.kind is NameTokenKind.SHARP:
            special = self._expect(
                NameTokenKind.NAME, "Missing ctor or other special name after '#'"
            ).text
            flags = NameFlags.SPECIAL_NAME
            if special == CONSTRUCTOR_NAME:
                flags |= NameFlags.CONSTRUCTOR
            return "#" + special, flags

        if tok.kind is NameTokenKind.DOUBLE_SHARP:
            special = self._expect(
                NameTokenKind.NAME, "Missing ctor or other special name after '##'"
            ).text
            flags = NameFlags.SPECIAL_NAME
            if special == CONSTRUCTOR_NAME:
                flags |= NameFlags.CLASS_CONSTRUCTOR | NameFlags.STATIC
            return "##" + special, flags

        if tok.kind is NameTokenKind.NAME:
            name = tok.text
            flags = NameFlags(0)
            while self._next().kind is NameTokenKind.SHARP:
                part = self._expect(
                    NameTokenKind.NAME, "Missing namespace/interface name after '#'"
                ).text
                name = f"{name}#{part}"
                flags = (
                    NameFlags.SPECIAL_NAME
                    | NameFlags.EXPLICIT_INTERFACE_IMPLEMENTATION
                )
            self._lexer.unget()
            return name, flags

        raise NameParseError("Missing class or method name", tok.start)

    # -----------------------------
    # Method arguments
    # -----------------------------

    def _parse_method_args_opt(self) -> tuple[Parameter, ...]:
        if self._next().kind is not NameTokenKind.LEFT_PAREN:
            self._lexer.unget()
            return ()

        if self._next().kind is NameTokenKind.RIGHT_PAREN:
            return ()
        self._lexer.unget()

        args = self._parse_arg_list()
        self._expect(
            NameTokenKind.RIGHT_PAREN, "Missing right parenthesis for method parameters"
        )
        return args

    def _parse_arg_list(self) -> tuple[Parameter, ...]:
        args: list[Parameter] = []
        while True:
            param = Parameter(self._parse_arg())
            if self._next().kind is NameTokenKind.AT:
                param = param.with_kind(ParameterKind.OUT)
            else:
                self._lexer.unget()
            args.append(param)
            if self._next().kind is not NameTokenKind.COMMA:
                self._lexer.unget()
                return tuple(args)

    def _parse_arg(self) -> PopulatedType:
        populated = self._parse_arg_type()
        arrays = self._parse_arrays_opt()
        if arrays:
            populated = populated.with_arrays(arrays)
        return populated

    def _parse_arrays_opt(self) -> list[ArrayInfo]:
        arrays = []
        while self._next().kind is NameTokenKind.LEFT_BRACKET:
            arrays.append(self._parse_array_body())
        self._lexer.unget()
        return arrays

    def _parse_array_body(self) -> ArrayInfo:
        if self._next().kind is NameTokenKind.RIGHT_BRACKET:
            return ArrayInfo(0)
        self._lexer.unget()

        dimensions = 0
        while True:
            self._expect(NameTokenKind.NUMBER, "Missing number in array brackets")
            self._expect(NameTokenKind.COLON, "Missing ':' in array brackets")
            dimensions += 1
            if self._next().kind is not NameTokenKind.COMMA:
                self._lexer.unget()
                break

        self._expect(
            NameTokenKind.RIGHT_BRACKET, "Missing right bracket ']' after array"
        )
        return ArrayInfo(dimensions)

    def _parse_arg_type(self) -> PopulatedType:
        tok = self._next()
        if tok.kind is NameTokenKind.BACKTICK:
            names = self._type_parameter_names
        elif tok.kind is NameTokenKind.DOUBLE_BACKTICK:
            names = self._method_type_parameter_names
        else:
            self._lexer.unget()
            return self._parse_type_path()

        number = self._expect(
            NameTokenKind.NUMBER, f"Missing generic argument number after {tok.text}"
        )
        index = int(number.text)
        if index >= len(names):
            msg = f"Invalid generic argument index {index} (only {len(names)} declared)"
            raise BackReferenceError(msg, number.start)
        return PopulatedType((PopulatedName(names[index]),))

    def _parse_type_path(self) -> PopulatedType:
        names = [self._parse_type_name()]
        while self._next().kind is NameTokenKind.PERIOD:
            names.append(self._parse_type_name())
        self._lexer.unget()
        return PopulatedType(tuple(names))

    def _parse_type_name(self) -> PopulatedName:
        name = self._expect(NameTokenKind.NAME, "Missing type name").text

        if self._next().kind is not NameTokenKind.LEFT_BRACE:
            self._lexer.unget()
            return PopulatedName(name)

        type_arguments = [self._parse_arg()]
        while self._next().kind is NameTokenKind.COMMA:
            type_arguments.append(self._parse_arg())
        self._lexer.unget()

        self._expect(NameTokenKind.RIGHT_BRACE, "Missing '}' after generic arguments")
        return PopulatedName(name, tuple(type_arguments))

    # -----------------------------
    # Helpers
    # -----------------------------

    def _next(self) -> NameToken:
        tok = self._lexer.next()
        if tok.kind is NameTokenKind.ERROR:
            msg = f"Unrecognized character {tok.text!r}"
            raise NameLexError(msg, tok.start)
        return tok

    def _expect(self, kind: NameTokenKind, message: str) -> NameToken:
        """Require ``kind`` next or raise with the offending token's offset."""
        tok = self._next()
        if tok.kind is not kind:
            raise NameParseError(message, tok.start)
        return tok


def parse_identifier(text: str, *, is_method: bool = False) -> Identifier:
    """Parse an identifier string without its ``K:`` prefix."""
    return NameParser(text).parse(is_method=is_method)


def parse_type(
    text: str,
    type_parameters: list[str] | tuple[str, ...] = (),
    method_type_parameters: list[str] | tuple[str, ...] = (),
) -> PopulatedType:
    """Parse a single parameter type such as ``System.Int32[]`` or ``List{`0}``."""
    return NameParser(text).parse_type(type_parameters, method_type_parameters)


def parse_member_id(text: str) -> tuple[MemberKind, Identifier]:
    """Parse a prefixed member id such as ``M:Ns.Widget.Find(System.Int32)``."""
    stripped = text.lstrip()
    start = len(text) - len(stripped)
    text = stripped.rstrip()
    if len(text) < MEMBER_ID_PREFIX_LEN or text[1] != ":":
        msg = "Missing member kind prefix such as 'T:' or 'M:'"
        raise NameParseError(msg, start)

    kind = MemberKind.from_prefix(text[0])
    if kind is None:
        msg = f"Unsupported member kind prefix '{text[:MEMBER_ID_PREFIX_LEN]}'"
        raise NameParseError(msg, start)

    try:
        identifier = parse_identifier(
            text[MEMBER_ID_PREFIX_LEN:], is_method=kind is MemberKind.METHOD
        )
    except NameParseError as e:
        # Report offsets against the text the caller handed us.
        offset = e.offset + start + MEMBER_ID_PREFIX_LEN
        raise type(e)(e.expectation, offset) from e
    return kind, identifier
