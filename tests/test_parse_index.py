import pytest

from ddl_schema.errors import MissingIndexSpecError
from ddl_schema.models import AddIndex, AddPrimaryKey, CreateIndex, Index, IndexColumn
from ddl_schema.parser import parse_ddl, parse_index
from ddl_schema.sqlparser import ADD_INDEX_STR, DDLStatement, TableName


def test_create_index():
    ddl = parse_ddl('mysql', 'CREATE INDEX idx ON t (col)')
    assert ddl == CreateIndex(
        statement='CREATE INDEX idx ON t (col)',
        table_name='t',
        index=Index(name='idx', index_type='', columns=(IndexColumn(column='col'),)),
    )
    assert ddl.index.columns[0].length is None


@pytest.mark.parametrize("mode,sql,ddl_class,table_name,index", [
    (
        'mysql',
        'CREATE UNIQUE INDEX idx_ab ON t (a, b DESC)',
        CreateIndex, 't',
        Index(name='idx_ab', index_type='', columns=(IndexColumn('a'), IndexColumn('b')), unique=True),
    ),
    (
        'postgres',
        'CREATE INDEX CONCURRENTLY IF NOT EXISTS idx_created ON public.events USING btree (created_at)',
        CreateIndex, 'events',
        Index(name='idx_created', index_type='', columns=(IndexColumn('created_at'),)),
    ),
    (
        'mysql',
        'ALTER TABLE t ADD INDEX idx_a (a)',
        AddIndex, 't',
        Index(name='idx_a', index_type='', columns=(IndexColumn('a'),)),
    ),
    (
        'mysql',
        'ALTER TABLE `t` ADD UNIQUE KEY `uk` (`a`, `b`)',
        AddIndex, 't',
        Index(name='uk', index_type='', columns=(IndexColumn('a'), IndexColumn('b')), unique=True),
    ),
    (
        'mysql',
        'ALTER TABLE t ADD UNIQUE (a)',
        AddIndex, 't',
        Index(name='', index_type='', columns=(IndexColumn('a'),), unique=True),
    ),
    (
        'postgres',
        'ALTER TABLE t ADD CONSTRAINT uq_email UNIQUE (email)',
        AddIndex, 't',
        Index(name='uq_email', index_type='', columns=(IndexColumn('email'),), unique=True),
    ),
    (
        'mysql',
        'ALTER TABLE t ADD PRIMARY KEY (id)',
        AddPrimaryKey, 't',
        Index(name='PRIMARY', index_type='', columns=(IndexColumn('id'),), unique=True),
    ),
    (
        'postgres',
        'ALTER TABLE ONLY t ADD CONSTRAINT t_pkey PRIMARY KEY (id, version)',
        AddPrimaryKey, 't',
        Index(name='t_pkey', index_type='', columns=(IndexColumn('id'), IndexColumn('version')), unique=True),
    ),
])
def test_index_statements(mode, sql, ddl_class, table_name, index):
    ddl = parse_ddl(mode, sql)
    assert type(ddl) is ddl_class, f"Failed for {sql}: got {type(ddl).__name__}"
    assert ddl.statement == sql
    assert ddl.table_name == table_name
    assert ddl.index == index, f"Failed for {sql}: got {ddl.index}"


def test_index_path_drops_type_and_primary_flag():
    index = parse_ddl('mysql', 'ALTER TABLE t ADD PRIMARY KEY (id)').index
    assert index.index_type == ''
    assert index.primary is False


def test_missing_index_spec():
    stmt = DDLStatement(action=ADD_INDEX_STR, table=TableName('t'), index_cols=['a'])
    with pytest.raises(MissingIndexSpecError) as exc_info:
        parse_index(stmt)
    assert exc_info.value.action == ADD_INDEX_STR


def test_index_ddl_to_dict():
    ddl = parse_ddl('mysql', 'CREATE INDEX idx ON t (col)')
    assert ddl.to_dict() == {
        'kind': 'create_index',
        'statement': 'CREATE INDEX idx ON t (col)',
        'table_name': 't',
        'index': {
            'name': 'idx',
            'type': '',
            'columns': [{'column': 'col', 'length': None}],
            'primary': False,
            'unique': False,
        },
    }
