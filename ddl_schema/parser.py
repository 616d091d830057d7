"""
Translation of parsed schema statements into the ddl_schema model.

The SQL grammar lives in ddl_schema.sqlparser; this module only walks the
syntax trees it produces:

    parse_ddls   splits a `;`-separated batch and parses statement by statement
    parse_ddl    parses one statement and picks the DDL variant for its action
    parse_table  CREATE TABLE body -> Table
    parse_index  CREATE INDEX / ALTER TABLE ADD ... -> Index
    parse_value  literal token -> Value

Destructive statements (DROP TABLE etc.) are rejected, never skipped.
"""

import math
import re
from dataclasses import dataclass
from logging import getLogger
from typing import Optional

from . import sqlparser
from .sqlparser import (
    ADD_INDEX_STR,
    ADD_PRIMARY_KEY_STR,
    CREATE_INDEX_STR,
    CREATE_STR,
    ColumnKeyOpt,
    ParserMode,
    ValType,
)
from .errors import (
    DDLError,
    MalformedNumericLiteralError,
    MissingIndexSpecError,
    SQLSyntaxError,
    UnsupportedActionError,
    UnsupportedStatementError,
)
from .models import (
    DDL,
    AddIndex,
    AddPrimaryKey,
    Column,
    ColumnKeyOption,
    CreateIndex,
    CreateTable,
    GeneratorMode,
    Index,
    IndexColumn,
    Table,
    Value,
    ValueType,
)


logger = getLogger(__name__)

PARSER_MODES = {
    GeneratorMode.MYSQL: ParserMode.MYSQL,
    GeneratorMode.POSTGRES: ParserMode.POSTGRES,
}

VALUE_TYPES = {
    ValType.STR_VAL: ValueType.STRING,
    ValType.INT_VAL: ValueType.INTEGER,
    ValType.FLOAT_VAL: ValueType.FLOAT,
    ValType.HEX_NUM: ValueType.HEX_NUMBER,
    ValType.HEX_VAL: ValueType.HEX_STRING,
    ValType.VAL_ARG: ValueType.PLACEHOLDER,
    ValType.BIT_VAL: ValueType.BIT,
}

# Spelled out member by member: the two enums share ordinals today, but
# nothing else ties them together.
KEY_OPTIONS = {
    ColumnKeyOpt.NONE: ColumnKeyOption.NONE,
    ColumnKeyOpt.PRIMARY: ColumnKeyOption.PRIMARY,
    ColumnKeyOpt.SPATIAL_KEY: ColumnKeyOption.SPATIAL_KEY,
    ColumnKeyOpt.UNIQUE: ColumnKeyOption.UNIQUE,
    ColumnKeyOpt.UNIQUE_KEY: ColumnKeyOption.UNIQUE_KEY,
    ColumnKeyOpt.KEY: ColumnKeyOption.KEY,
}

INDEX_DDLS = {
    CREATE_INDEX_STR: CreateIndex,
    ADD_INDEX_STR: AddIndex,
    ADD_PRIMARY_KEY_STR: AddPrimaryKey,
}

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

INTEGER_PATTERN = re.compile(r'[+-]?[0-9]+')
FLOAT_PATTERN = re.compile(r'[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?')


@dataclass(frozen=True)
class ParseDDLsResult:
    """Statements parsed from a batch, plus the error that stopped it (if any)"""
    ddls: tuple[DDL, ...] = ()
    error: Optional[DDLError] = None

    @property
    def ok(self):
        return self.error is None


def parse_integer(raw: str) -> int:
    if not INTEGER_PATTERN.fullmatch(raw):
        raise MalformedNumericLiteralError(ValueType.INTEGER, raw)
    value = int(raw)
    if value < INT64_MIN or value > INT64_MAX:
        raise MalformedNumericLiteralError(ValueType.INTEGER, raw)
    return value


def parse_float(raw: str) -> float:
    if not FLOAT_PATTERN.fullmatch(raw):
        raise MalformedNumericLiteralError(ValueType.FLOAT, raw)
    value = float(raw)
    if math.isinf(value):
        raise MalformedNumericLiteralError(ValueType.FLOAT, raw)
    return value


def parse_value(val) -> Optional[Value]:
    if val is None:
        return None

    value_type = VALUE_TYPES.get(val.type)
    if value_type is None:
        # the grammar only emits the kinds listed in VALUE_TYPES
        logger.error(f'unknown literal type {val.type!r} for value {val.val!r}')
        return None

    raw = val.val
    if value_type == ValueType.STRING:
        return Value(value_type=value_type, raw=raw, str_val=raw)
    if value_type == ValueType.INTEGER:
        return Value(value_type=value_type, raw=raw, int_val=parse_integer(raw))
    if value_type == ValueType.FLOAT:
        return Value(value_type=value_type, raw=raw, float_val=parse_float(raw))
    if value_type == ValueType.BIT:
        return Value(value_type=value_type, raw=raw, bit_val=raw == '1')
    return Value(value_type=value_type, raw=raw)


def parse_table(stmt) -> Table:
    columns = []
    for parsed_col in stmt.table_spec.columns:
        column_type = parsed_col.type
        columns.append(Column(
            name=parsed_col.name,
            type_name=column_type.type,
            unsigned=bool(column_type.unsigned),
            not_null=bool(column_type.not_null),
            auto_increment=bool(column_type.autoincrement),
            default_value=parse_value(column_type.default),
            length=parse_value(column_type.length),
            scale=parse_value(column_type.scale),
            key_option=KEY_OPTIONS[column_type.key_opt],
            enum_values=tuple(column_type.enum_values),
        ))

    indexes = []
    for index_def in stmt.table_spec.indexes:
        index_columns = tuple(
            IndexColumn(column=column.column, length=parse_value(column.length))
            for column in index_def.columns
        )
        indexes.append(Index(
            name=index_def.info.name,
            index_type=index_def.info.type,
            columns=index_columns,
            primary=index_def.info.primary,
            unique=index_def.info.unique,
        ))

    return Table(name=stmt.new_name.name, columns=tuple(columns), indexes=tuple(indexes))


def parse_index(stmt) -> Index:
    if stmt.index_spec is None:
        raise MissingIndexSpecError(stmt.action)

    # index type, prefix lengths and the primary flag are not exposed by the
    # grammar for these statements
    return Index(
        name=stmt.index_spec.name,
        index_type='',
        columns=tuple(IndexColumn(column=column) for column in stmt.index_cols),
        primary=False,
        unique=stmt.index_spec.unique,
    )


def parse_ddl(mode, ddl: str) -> DDL:
    """
    Parse a single statement like `CREATE TABLE` or `ALTER TABLE ... ADD INDEX`.

    Raises a DDLError subclass for syntax errors, statements that are not
    DDL, and DDL actions outside CREATE TABLE / CREATE INDEX /
    ALTER TABLE ADD INDEX / ALTER TABLE ADD PRIMARY KEY.
    """
    parser_mode = PARSER_MODES[GeneratorMode(mode)]

    try:
        stmt = sqlparser.parse_with_mode(ddl, parser_mode)
    except sqlparser.ParseError as e:
        raise SQLSyntaxError(e.message, ddl) from e

    if not isinstance(stmt, sqlparser.DDLStatement):
        raise UnsupportedStatementError(ddl)

    logger.debug(f'parsing {stmt.action} statement')
    try:
        if stmt.action == CREATE_STR:
            return CreateTable(statement=ddl, table=parse_table(stmt))

        ddl_class = INDEX_DDLS.get(stmt.action)
        if ddl_class is None:
            raise UnsupportedActionError(stmt.action, ddl)
        return ddl_class(statement=ddl, table_name=stmt.table.name, index=parse_index(stmt))
    except DDLError as e:
        if not e.statement:
            e.statement = ddl
        raise


def parse_ddls(mode, ddls: str) -> ParseDDLsResult:
    """
    Parse `ddls`, which is expected to be `;`-concatenated DDL statements.

    Parsing stops at the first failing statement. The statements parsed
    before it are returned together with the error.
    """
    parser_mode = PARSER_MODES[GeneratorMode(mode)]
    parsed = []
    for ddl in ddls.split(';'):
        ddl = ddl.strip()
        if not ddl:
            continue
        if not sqlparser.strip_sql_comments(ddl, parser_mode):
            logger.debug(f'skipping comment-only segment: {ddl!r}')
            continue

        try:
            parsed.append(parse_ddl(mode, ddl))
        except DDLError as e:
            logger.debug(f'stopped after {len(parsed)} statements: {e}')
            return ParseDDLsResult(ddls=tuple(parsed), error=e)

    logger.debug(f'parsed {len(parsed)} statements')
    return ParseDDLsResult(ddls=tuple(parsed))
