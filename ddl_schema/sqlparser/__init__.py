from .ast import (
    ParserMode,
    ValType,
    ColumnKeyOpt,
    SQLVal,
    TableName,
    ColumnType,
    ColumnDefinition,
    IndexInfo,
    IndexColumn,
    IndexDefinition,
    TableSpec,
    IndexSpec,
    DDLStatement,
    OtherStatement,
    CREATE_STR,
    CREATE_INDEX_STR,
    ADD_INDEX_STR,
    ADD_PRIMARY_KEY_STR,
    ALTER_STR,
    DROP_STR,
    RENAME_STR,
    TRUNCATE_STR,
)
from .parser import ParseError, parse_with_mode, strip_sql_comments

__all__ = [
    'ParserMode',
    'ValType',
    'ColumnKeyOpt',
    'SQLVal',
    'TableName',
    'ColumnType',
    'ColumnDefinition',
    'IndexInfo',
    'IndexColumn',
    'IndexDefinition',
    'TableSpec',
    'IndexSpec',
    'DDLStatement',
    'OtherStatement',
    'CREATE_STR',
    'CREATE_INDEX_STR',
    'ADD_INDEX_STR',
    'ADD_PRIMARY_KEY_STR',
    'ALTER_STR',
    'DROP_STR',
    'RENAME_STR',
    'TRUNCATE_STR',
    'ParseError',
    'parse_with_mode',
    'strip_sql_comments',
]
