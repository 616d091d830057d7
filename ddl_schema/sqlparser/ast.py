from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Optional


class ParserMode(Enum):
    MYSQL = 'mysql'
    POSTGRES = 'postgres'


class ValType(IntEnum):
    """Kind of a literal token, assigned by the grammar"""
    STR_VAL = 0
    INT_VAL = 1
    FLOAT_VAL = 2
    HEX_NUM = 3
    HEX_VAL = 4
    VAL_ARG = 5
    BIT_VAL = 6


class ColumnKeyOpt(IntEnum):
    """Key constraint written inline on a column definition"""
    NONE = 0
    PRIMARY = 1
    SPATIAL_KEY = 2
    UNIQUE = 3
    UNIQUE_KEY = 4
    KEY = 5


# DDL actions
CREATE_STR = 'create'
CREATE_INDEX_STR = 'create index'
ADD_INDEX_STR = 'add index'
ADD_PRIMARY_KEY_STR = 'add primary key'
ALTER_STR = 'alter'
DROP_STR = 'drop'
RENAME_STR = 'rename'
TRUNCATE_STR = 'truncate'


@dataclass
class SQLVal:
    type: ValType
    val: str


@dataclass
class TableName:
    name: str
    qualifier: str = ''

    def __str__(self):
        if self.qualifier:
            return f'{self.qualifier}.{self.name}'
        return self.name


@dataclass
class ColumnType:
    type: str
    unsigned: bool = False
    zerofill: bool = False
    not_null: bool = False
    autoincrement: bool = False
    default: Optional[SQLVal] = None
    length: Optional[SQLVal] = None
    scale: Optional[SQLVal] = None
    key_opt: ColumnKeyOpt = ColumnKeyOpt.NONE
    comment: Optional[SQLVal] = None
    charset: str = ''
    collate: str = ''
    enum_values: list[str] = field(default_factory=list)


@dataclass
class ColumnDefinition:
    name: str
    type: ColumnType


@dataclass
class IndexInfo:
    type: str
    name: str
    primary: bool = False
    unique: bool = False


@dataclass
class IndexColumn:
    column: str
    length: Optional[SQLVal] = None


@dataclass
class IndexDefinition:
    info: IndexInfo
    columns: list[IndexColumn] = field(default_factory=list)


@dataclass
class TableSpec:
    columns: list[ColumnDefinition] = field(default_factory=list)
    indexes: list[IndexDefinition] = field(default_factory=list)
    options: str = ''


@dataclass
class IndexSpec:
    name: str
    unique: bool = False


@dataclass
class DDLStatement:
    """A schema statement.

    Which fields are set depends on the action: `create` fills `new_name` and
    `table_spec`; the index actions fill `table`, `index_spec` and
    `index_cols`; everything else carries at most `table`.
    """
    action: str
    table: Optional[TableName] = None
    new_name: Optional[TableName] = None
    table_spec: Optional[TableSpec] = None
    index_spec: Optional[IndexSpec] = None
    index_cols: list[str] = field(default_factory=list)


@dataclass
class OtherStatement:
    """Any statement that parsed but is not DDL (SELECT, INSERT, ...)"""
    kind: str
    text: str
