from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, ClassVar, Optional, Union


class GeneratorMode(Enum):
    MYSQL = 'mysql'
    POSTGRES = 'postgres'


class ValueType(Enum):
    STRING = 'string'
    INTEGER = 'integer'
    FLOAT = 'float'
    HEX_NUMBER = 'hex_number'
    HEX_STRING = 'hex_string'
    PLACEHOLDER = 'placeholder'
    BIT = 'bit'


class ColumnKeyOption(IntEnum):
    """Key constraint declared inline on a column.

    The ordinals match the grammar's own key option numbering, see
    ddl_schema.parser.KEY_OPTIONS.
    """
    NONE = 0
    PRIMARY = 1
    SPATIAL_KEY = 2
    UNIQUE = 3
    UNIQUE_KEY = 4
    KEY = 5


@dataclass(frozen=True)
class Value:
    """A literal from a schema statement.

    `raw` keeps the token text as written so the literal can be put back into
    SQL verbatim. Only the decoded field matching `value_type` is set.
    """
    value_type: ValueType
    raw: str
    str_val: Optional[str] = None
    int_val: Optional[int] = None
    float_val: Optional[float] = None
    bit_val: Optional[bool] = None

    @property
    def payload(self) -> Any:
        if self.value_type == ValueType.STRING:
            return self.str_val
        if self.value_type == ValueType.INTEGER:
            return self.int_val
        if self.value_type == ValueType.FLOAT:
            return self.float_val
        if self.value_type == ValueType.BIT:
            return self.bit_val
        return self.raw

    def to_dict(self):
        return {'type': self.value_type.name, 'raw': self.raw, 'value': self.payload}


def _value_dict(value: Optional[Value]):
    if value is None:
        return None
    return value.to_dict()


@dataclass(frozen=True)
class Column:
    name: str
    type_name: str
    unsigned: bool = False
    not_null: bool = False
    auto_increment: bool = False
    default_value: Optional[Value] = None
    length: Optional[Value] = None
    scale: Optional[Value] = None
    key_option: ColumnKeyOption = ColumnKeyOption.NONE
    enum_values: tuple[str, ...] = ()

    def to_dict(self):
        return {
            'name': self.name,
            'type': self.type_name,
            'unsigned': self.unsigned,
            'not_null': self.not_null,
            'auto_increment': self.auto_increment,
            'default': _value_dict(self.default_value),
            'length': _value_dict(self.length),
            'scale': _value_dict(self.scale),
            'key_option': self.key_option.name,
            'enum_values': list(self.enum_values),
        }


@dataclass(frozen=True)
class IndexColumn:
    column: str
    length: Optional[Value] = None

    def to_dict(self):
        return {'column': self.column, 'length': _value_dict(self.length)}


@dataclass(frozen=True)
class Index:
    name: str
    index_type: str
    columns: tuple[IndexColumn, ...] = ()
    primary: bool = False
    unique: bool = False

    @property
    def column_names(self):
        return [index_column.column for index_column in self.columns]

    def to_dict(self):
        return {
            'name': self.name,
            'type': self.index_type,
            'columns': [index_column.to_dict() for index_column in self.columns],
            'primary': self.primary,
            'unique': self.unique,
        }


@dataclass(frozen=True)
class Table:
    name: str
    columns: tuple[Column, ...] = ()
    indexes: tuple[Index, ...] = ()

    def has_column(self, column_name):
        return self.get_column(column_name) is not None

    def get_column(self, column_name):
        for column in self.columns:
            if column.name == column_name:
                return column
        return None

    @property
    def primary_index(self):
        for index in self.indexes:
            if index.primary:
                return index
        return None

    def to_dict(self):
        return {
            'name': self.name,
            'columns': [column.to_dict() for column in self.columns],
            'indexes': [index.to_dict() for index in self.indexes],
        }


@dataclass(frozen=True)
class CreateTable:
    statement: str
    table: Table

    def to_dict(self):
        return {'kind': 'create_table', 'statement': self.statement, 'table': self.table.to_dict()}


@dataclass(frozen=True)
class _TableIndexDDL:
    statement: str
    table_name: str
    index: Index
    kind: ClassVar[str] = ''

    def to_dict(self):
        return {
            'kind': self.kind,
            'statement': self.statement,
            'table_name': self.table_name,
            'index': self.index.to_dict(),
        }


@dataclass(frozen=True)
class CreateIndex(_TableIndexDDL):
    kind: ClassVar[str] = 'create_index'


@dataclass(frozen=True)
class AddIndex(_TableIndexDDL):
    kind: ClassVar[str] = 'add_index'


@dataclass(frozen=True)
class AddPrimaryKey(_TableIndexDDL):
    kind: ClassVar[str] = 'add_primary_key'


DDL = Union[CreateTable, CreateIndex, AddIndex, AddPrimaryKey]
DDL_TYPES = (CreateTable, CreateIndex, AddIndex, AddPrimaryKey)
