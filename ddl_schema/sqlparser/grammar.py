import re
from collections import namedtuple
from dataclasses import dataclass, field
from typing import Optional

from pyparsing import (
    CaselessKeyword,
    DelimitedList,
    Group,
    MatchFirst,
    Opt,
    QuotedString,
    Regex,
    StringEnd,
    Suppress,
    Word,
    ZeroOrMore,
    alphanums,
    alphas,
)

from .ast import (
    ADD_INDEX_STR,
    ADD_PRIMARY_KEY_STR,
    ALTER_STR,
    CREATE_INDEX_STR,
    CREATE_STR,
    DROP_STR,
    RENAME_STR,
    TRUNCATE_STR,
    ColumnDefinition,
    ColumnKeyOpt,
    ColumnType,
    DDLStatement,
    IndexColumn,
    IndexDefinition,
    IndexInfo,
    IndexSpec,
    ParserMode,
    SQLVal,
    TableName,
    TableSpec,
    ValType,
)


MULTIWORD_TYPES = (
    'double precision',
    'character varying',
    'bit varying',
    'timestamp with time zone',
    'timestamp without time zone',
    'time with time zone',
    'time without time zone',
)

# Words that start an index or constraint clause inside CREATE TABLE.
# A bare column name can not be one of them.
INDEX_START_WORDS = (
    'PRIMARY', 'UNIQUE', 'KEY', 'INDEX', 'SPATIAL', 'FULLTEXT',
    'CONSTRAINT', 'FOREIGN', 'CHECK',
)

ColumnAttribute = namedtuple('ColumnAttribute', ['name', 'value'])


@dataclass
class AlterSpec:
    action: str
    index_spec: Optional[IndexSpec] = None
    index_cols: list[str] = field(default_factory=list)


def keyword(phrase):
    """Case-insensitive keyword sequence, e.g. keyword('PRIMARY KEY')"""
    words = [CaselessKeyword(word) for word in phrase.split()]
    expr = words[0]
    for word in words[1:]:
        expr = expr + word
    return expr


def _first(toks):
    return toks[0]


def _const(value):
    def action(toks):
        return value
    return action


def _lower_joined(toks):
    return ' '.join(toks).lower()


def _sql_val(value_type, group=None):
    def action(toks):
        raw = toks[group] if group else toks[0]
        return SQLVal(type=value_type, val=raw)
    return action


def _placeholder(raw):
    def action(toks):
        return SQLVal(type=ValType.VAL_ARG, val=raw)
    return action


def _attribute(name, value):
    def action(toks):
        return ColumnAttribute(name, value)
    return action


def _build_table_name(toks):
    return TableName(name=toks['name'], qualifier=toks.get('qualifier', ''))


def _build_column(toks):
    column_type = ColumnType(
        type=toks['type'],
        unsigned='unsigned' in toks,
        zerofill='zerofill' in toks,
        length=toks.get('length'),
        scale=toks.get('scale'),
    )
    if 'enum_values' in toks:
        column_type.enum_values = toks['enum_values'].as_list()
    for token in toks:
        if isinstance(token, ColumnAttribute):
            setattr(column_type, token.name, token.value)
    return ColumnDefinition(name=toks['name'], type=column_type)


def _build_index_column(toks):
    return IndexColumn(column=toks['column'], length=toks.get('length'))


def _build_index_definition(toks):
    index_type = toks['index_type']
    primary = index_type == 'primary key'
    if primary:
        name = toks.get('constraint_name') or 'PRIMARY'
    else:
        name = toks.get('index_name') or toks.get('constraint_name') or ''
    info = IndexInfo(
        type=index_type,
        name=name,
        primary=primary,
        unique=primary or index_type.startswith('unique'),
    )
    columns = [token for token in toks if isinstance(token, IndexColumn)]
    return IndexDefinition(info=info, columns=columns)


def _build_create_table(toks):
    table_spec = TableSpec(
        columns=[token for token in toks if isinstance(token, ColumnDefinition)],
        indexes=[token for token in toks if isinstance(token, IndexDefinition)],
        options=toks.get('options', '').strip(),
    )
    return DDLStatement(action=CREATE_STR, new_name=toks['new_name'], table_spec=table_spec)


def _build_create_index(toks):
    return DDLStatement(
        action=CREATE_INDEX_STR,
        table=toks['table'],
        index_spec=IndexSpec(name=toks['index_name'], unique='unique' in toks),
        index_cols=toks['columns'].as_list(),
    )


def _build_add_index(toks):
    return AlterSpec(
        action=ADD_INDEX_STR,
        index_spec=IndexSpec(name=toks.get('index_name', ''), unique='unique' in toks),
        index_cols=toks['columns'].as_list(),
    )


def _build_add_primary_key(toks):
    return AlterSpec(
        action=ADD_PRIMARY_KEY_STR,
        index_spec=IndexSpec(name=toks.get('constraint_name') or 'PRIMARY', unique=True),
        index_cols=toks['columns'].as_list(),
    )


def _build_add_unique_constraint(toks):
    return AlterSpec(
        action=ADD_INDEX_STR,
        index_spec=IndexSpec(name=toks['constraint_name'], unique=True),
        index_cols=toks['columns'].as_list(),
    )


def _build_alter_other(toks):
    if toks['rest'].split()[0].upper() == 'RENAME':
        return AlterSpec(action=RENAME_STR)
    return AlterSpec(action=ALTER_STR)


def _build_alter(toks):
    alter_spec = toks[-1]
    return DDLStatement(
        action=alter_spec.action,
        table=toks['table'],
        index_spec=alter_spec.index_spec,
        index_cols=alter_spec.index_cols,
    )


def _build_drop_table(toks):
    return DDLStatement(action=DROP_STR, table=toks[0])


def _build_drop_other(toks):
    return DDLStatement(action=f"{DROP_STR} {toks['kind'].lower()}")


def _build_create_other(toks):
    return DDLStatement(action=f"{CREATE_STR} {toks['kind'].lower()}")


def _build_rename(toks):
    return DDLStatement(action=RENAME_STR, table=toks['table'])


def _build_truncate(toks):
    return DDLStatement(action=TRUNCATE_STR, table=toks['table'])


def build_grammar(mode: ParserMode):
    CREATE, TABLE, INDEX, KEY, UNIQUE, ON, USING, ADD, CONSTRAINT, DEFAULT = map(
        CaselessKeyword,
        ['CREATE', 'TABLE', 'INDEX', 'KEY', 'UNIQUE', 'ON', 'USING', 'ADD', 'CONSTRAINT', 'DEFAULT'],
    )
    TEMPORARY = CaselessKeyword('TEMPORARY')
    ORDER = CaselessKeyword('ASC') | CaselessKeyword('DESC')
    rest = Regex(r'\S.*', re.DOTALL)
    word = Word(alphas + '_', alphanums + '_')

    # identifiers
    bare_identifier = Word(alphas + '_', alphanums + '_$')
    if mode == ParserMode.POSTGRES:
        quoted_identifier = QuotedString('"', esc_quote='""')
    else:
        quoted_identifier = QuotedString('`', esc_quote='``')
    identifier = (quoted_identifier | bare_identifier).set_name('identifier')
    table_name = (
        Opt(identifier('qualifier') + Suppress('.')) + identifier('name')
    ).set_parse_action(_build_table_name).set_name('table name')

    # literals
    if mode == ParserMode.POSTGRES:
        string_token = QuotedString("'", esc_quote="''", multiline=True)
        val_arg = Regex(r'\$\d+') | Regex(r':[A-Za-z_]\w*')
    else:
        string_token = (
            QuotedString("'", esc_char='\\', esc_quote="''", multiline=True)
            | QuotedString('"', esc_char='\\', esc_quote='""', multiline=True)
        )
        val_arg = Regex(r':[A-Za-z_]\w*') | Regex(r'\?')
    string_val = string_token.copy().set_parse_action(_sql_val(ValType.STR_VAL))
    hex_val = Regex(r"[xX]'(?P<raw>[0-9a-fA-F]*)'").set_parse_action(_sql_val(ValType.HEX_VAL, 'raw'))
    bit_val = Regex(r"[bB]'(?P<raw>[01]*)'").set_parse_action(_sql_val(ValType.BIT_VAL, 'raw'))
    hex_num = Regex(r'0[xX][0-9a-fA-F]+(?!\w)').set_parse_action(_sql_val(ValType.HEX_NUM))
    float_val = Regex(
        r'[+-]?(?:\d+\.\d*|\.\d+)(?:[eE][+-]?\d+)?(?!\w)|[+-]?\d+[eE][+-]?\d+(?!\w)'
    ).set_parse_action(_sql_val(ValType.FLOAT_VAL))
    int_val = Regex(r'[+-]?\d+(?![\w.])').set_parse_action(_sql_val(ValType.INT_VAL))
    val_arg = val_arg.set_parse_action(_sql_val(ValType.VAL_ARG))
    literal = (hex_val | bit_val | hex_num | float_val | int_val | string_val | val_arg).set_name('literal')

    current_timestamp = CaselessKeyword('CURRENT_TIMESTAMP') + Opt(Suppress('(') + Opt(int_val) + Suppress(')'))
    keyword_default = (
        CaselessKeyword('NULL').set_parse_action(_placeholder('null'))
        | current_timestamp.copy().set_parse_action(_placeholder('current_timestamp'))
        | CaselessKeyword('TRUE').set_parse_action(_placeholder('true'))
        | CaselessKeyword('FALSE').set_parse_action(_placeholder('false'))
    )
    type_name = MatchFirst(
        [keyword(phrase).set_parse_action(_const(phrase)) for phrase in MULTIWORD_TYPES]
        + [word.copy().set_parse_action(lambda toks: toks[0].lower())]
    ).set_parse_action(_first)
    default_value = literal | keyword_default
    if mode == ParserMode.POSTGRES:
        default_value = default_value + Suppress(Opt('::' + type_name))

    # column definitions
    enum_type = (CaselessKeyword('ENUM') | CaselessKeyword('SET')).set_parse_action(
        lambda toks: toks[0].lower()
    )
    enum_values = Suppress('(') + DelimitedList(string_token) + Suppress(')')
    length_spec = Suppress('(') + int_val('length') + Opt(Suppress(',') + int_val('scale')) + Suppress(')')
    column_type = (
        enum_type('type') + Group(enum_values)('enum_values')
        | type_name('type') + Opt(length_spec)
    )
    column_attribute = MatchFirst([
        keyword('NOT NULL').set_parse_action(_attribute('not_null', True)),
        CaselessKeyword('NULL').set_parse_action(_attribute('not_null', False)),
        (Suppress(DEFAULT) + default_value).set_parse_action(lambda toks: ColumnAttribute('default', toks[0])),
        CaselessKeyword('AUTO_INCREMENT').set_parse_action(_attribute('autoincrement', True)),
        keyword('PRIMARY KEY').set_parse_action(_attribute('key_opt', ColumnKeyOpt.PRIMARY)),
        keyword('UNIQUE KEY').set_parse_action(_attribute('key_opt', ColumnKeyOpt.UNIQUE_KEY)),
        UNIQUE.copy().set_parse_action(_attribute('key_opt', ColumnKeyOpt.UNIQUE)),
        keyword('SPATIAL KEY').set_parse_action(_attribute('key_opt', ColumnKeyOpt.SPATIAL_KEY)),
        KEY.copy().set_parse_action(_attribute('key_opt', ColumnKeyOpt.KEY)),
        (Suppress(CaselessKeyword('COMMENT')) + string_val).set_parse_action(
            lambda toks: ColumnAttribute('comment', toks[0])
        ),
        (Suppress(keyword('CHARACTER SET') | CaselessKeyword('CHARSET')) + word).set_parse_action(
            lambda toks: ColumnAttribute('charset', toks[0])
        ),
        (Suppress(CaselessKeyword('COLLATE')) + word).set_parse_action(
            lambda toks: ColumnAttribute('collate', toks[0])
        ),
        Suppress(keyword('ON UPDATE') + current_timestamp),
    ])
    index_start = MatchFirst([CaselessKeyword(w) for w in INDEX_START_WORDS])
    column_def = (
        ~index_start + identifier('name')
        + column_type
        + Opt(CaselessKeyword('UNSIGNED')('unsigned'))
        + Opt(CaselessKeyword('ZEROFILL')('zerofill'))
        + ZeroOrMore(column_attribute)
    ).set_parse_action(_build_column).set_name('column definition')

    # index definitions
    using = Suppress(USING + word)
    index_name = (~USING + identifier).set_parse_action(_first)
    index_column = (
        identifier('column')
        + Opt(Suppress('(') + int_val('length') + Suppress(')'))
        + Suppress(Opt(ORDER))
    ).set_parse_action(_build_index_column)
    index_columns = Suppress('(') + DelimitedList(index_column) + Suppress(')')
    plain_columns = Group(Suppress('(') + DelimitedList(identifier + Suppress(Opt(ORDER))) + Suppress(')'))

    primary_kind = keyword('PRIMARY KEY').set_parse_action(_const('primary key'))
    unique_kind = (keyword('UNIQUE KEY') | keyword('UNIQUE INDEX') | UNIQUE).set_parse_action(_lower_joined)
    key_kind = (
        (CaselessKeyword('SPATIAL') | CaselessKeyword('FULLTEXT')) + Opt(KEY | INDEX)
        | KEY
        | INDEX
    ).set_parse_action(_lower_joined)
    constraint_prefix = Suppress(CONSTRAINT) + Opt(~(primary_kind | UNIQUE) + identifier('constraint_name'))
    key_body = Opt(index_name('index_name')) + Opt(using) + index_columns + Opt(using)
    index_def = (
        Opt(constraint_prefix) + primary_kind('index_type') + Opt(using) + index_columns + Opt(using)
        | Opt(constraint_prefix) + unique_kind('index_type') + key_body
        | key_kind('index_type') + key_body
    ).set_parse_action(_build_index_definition).set_name('index definition')

    # CREATE TABLE
    table_body = Suppress('(') + DelimitedList(index_def | column_def) + Suppress(')')
    create_table = (
        Suppress(CREATE)
        + Suppress(Opt(TEMPORARY))
        + Suppress(TABLE)
        + Suppress(Opt(keyword('IF NOT EXISTS')))
        + table_name('new_name')
        + table_body
        + Opt(rest('options'))
    ).set_parse_action(_build_create_table)

    # CREATE INDEX
    create_index = (
        Suppress(CREATE)
        + Opt(UNIQUE)('unique')
        + Suppress(INDEX)
        + Suppress(Opt(CaselessKeyword('CONCURRENTLY')))
        + Suppress(Opt(keyword('IF NOT EXISTS')))
        + index_name('index_name')
        + Suppress(ON)
        + table_name('table')
        + Opt(using)
        + plain_columns('columns')
    ).set_parse_action(_build_create_index)

    # ALTER TABLE
    add_index = (
        Suppress(ADD)
        + (UNIQUE('unique') + Suppress(Opt(INDEX | KEY)) | Suppress(INDEX | KEY))
        + Opt(index_name('index_name'))
        + Opt(using)
        + plain_columns('columns')
        + Opt(using)
        + StringEnd()
    ).set_parse_action(_build_add_index)
    add_primary_key = (
        Suppress(ADD)
        + Opt(Suppress(CONSTRAINT) + ~primary_kind + identifier('constraint_name'))
        + Suppress(primary_kind)
        + Opt(using)
        + plain_columns('columns')
        + Opt(using)
        + StringEnd()
    ).set_parse_action(_build_add_primary_key)
    add_unique_constraint = (
        Suppress(ADD)
        + Suppress(CONSTRAINT)
        + identifier('constraint_name')
        + Suppress(UNIQUE)
        + Suppress(Opt(KEY | INDEX))
        + Opt(using)
        + plain_columns('columns')
        + Opt(using)
        + StringEnd()
    ).set_parse_action(_build_add_unique_constraint)
    # an ADD of an index or key that the forms above reject is a syntax
    # error, not some other ALTER
    index_add_start = Suppress(ADD) + (
        UNIQUE
        | INDEX
        | KEY
        | primary_kind
        | CONSTRAINT + Opt(~(primary_kind | UNIQUE) + identifier) + (primary_kind | UNIQUE)
    )
    alter_other = (~index_add_start + rest('rest')).set_parse_action(_build_alter_other)
    alter = (
        Suppress(CaselessKeyword('ALTER'))
        + Suppress(TABLE)
        + Suppress(Opt(CaselessKeyword('ONLY')))
        + table_name('table')
        + (add_primary_key | add_unique_constraint | add_index | alter_other)
    ).set_parse_action(_build_alter)

    # everything else that is recognised only by its action
    DROP = CaselessKeyword('DROP')
    drop_table = (
        Suppress(DROP)
        + Suppress(Opt(TEMPORARY))
        + Suppress(TABLE)
        + Suppress(Opt(keyword('IF EXISTS')))
        + DelimitedList(table_name)
        + Suppress(Opt(CaselessKeyword('CASCADE') | CaselessKeyword('RESTRICT')))
    ).set_parse_action(_build_drop_table)
    drop_other = (Suppress(DROP) + word('kind') + Opt(rest)).set_parse_action(_build_drop_other)
    create_other = (
        Suppress(CREATE)
        + Suppress(Opt(keyword('OR REPLACE')))
        + ~(TABLE | TEMPORARY | UNIQUE | INDEX)
        + word('kind')
        + Opt(rest)
    ).set_parse_action(_build_create_other)
    rename = (
        Suppress(CaselessKeyword('RENAME')) + Suppress(TABLE) + table_name('table') + Opt(rest)
    ).set_parse_action(_build_rename)
    truncate = (
        Suppress(CaselessKeyword('TRUNCATE')) + Suppress(Opt(TABLE)) + table_name('table') + Opt(rest)
    ).set_parse_action(_build_truncate)

    statement = (
        create_table
        | create_index
        | create_other
        | alter
        | drop_table
        | drop_other
        | rename
        | truncate
    ) + StringEnd()
    statement.streamline()
    return statement


GRAMMARS = {mode: build_grammar(mode) for mode in ParserMode}
