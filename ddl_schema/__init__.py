import importlib.metadata

from .errors import (
    DDLError,
    SQLSyntaxError,
    UnsupportedStatementError,
    UnsupportedActionError,
    MissingIndexSpecError,
    MalformedNumericLiteralError,
)
from .models import (
    GeneratorMode,
    ValueType,
    ColumnKeyOption,
    Value,
    Column,
    IndexColumn,
    Index,
    Table,
    CreateTable,
    CreateIndex,
    AddIndex,
    AddPrimaryKey,
    DDL,
    DDL_TYPES,
)
from .parser import (
    ParseDDLsResult,
    parse_value,
    parse_table,
    parse_index,
    parse_ddl,
    parse_ddls,
)

try:
    __version__ = importlib.metadata.version("ddl-schema")
except importlib.metadata.PackageNotFoundError:
    __version__ = "unknown"  # fallback version
