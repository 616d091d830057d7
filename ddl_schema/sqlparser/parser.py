import re
from logging import getLogger

import sqlparse
from pyparsing import ParseBaseException

from .ast import ParserMode, OtherStatement
from .grammar import GRAMMARS


logger = getLogger(__name__)

DDL_KEYWORDS = ('CREATE', 'ALTER', 'DROP', 'RENAME', 'TRUNCATE')

# Statements sqlparse does not classify but which are valid SQL, mostly the
# session and transaction preamble of schema dumps.
OTHER_STATEMENT_KEYWORDS = (
    'SET', 'USE', 'BEGIN', 'START', 'COMMIT', 'ROLLBACK', 'SAVEPOINT',
    'LOCK', 'UNLOCK', 'SHOW', 'DESCRIBE', 'DESC', 'EXPLAIN', 'GRANT', 'REVOKE',
    'ANALYZE', 'OPTIMIZE', 'FLUSH', 'CALL', 'DO', 'HANDLER', 'LOAD',
    'COMMENT', 'VACUUM', 'REINDEX', 'CLUSTER', 'COPY', 'DISCARD', 'RESET',
    'LISTEN', 'NOTIFY', 'PREPARE', 'EXECUTE', 'DEALLOCATE',
)

# MySQL `#` comments run to the end of the line; sqlparse only recognises
# them when followed by a space. Quoted text is matched first so a `#`
# inside a string or identifier survives.
MYSQL_HASH_COMMENT = re.compile(
    r"""('(?:[^'\\]|\\.|'')*'|"(?:[^"\\]|\\.|"")*"|`(?:[^`]|``)*`)|#[^\n]*""",
    re.DOTALL,
)


class ParseError(Exception):
    def __init__(self, message, position=0):
        self.message = message
        self.position = position
        super().__init__(message)


def strip_sql_comments(sql_statement, mode=ParserMode.MYSQL):
    sql_statement = sqlparse.format(sql_statement, strip_comments=True)
    if mode == ParserMode.MYSQL:
        sql_statement = MYSQL_HASH_COMMENT.sub(lambda m: m.group(1) or '', sql_statement)
    return sql_statement.strip()


def classify_statement(text):
    """Return the statement kind sqlparse assigns, or None when it is not SQL"""
    statement = sqlparse.parse(text)[0]
    kind = statement.get_type()
    if kind != 'UNKNOWN':
        return kind

    first_token = statement.token_first(skip_cm=True)
    if first_token is None:
        return None
    first_word = first_token.value.split(None, 1)[0].upper()
    if first_word in OTHER_STATEMENT_KEYWORDS:
        return first_word
    if first_token.ttype is not None and first_token.ttype in sqlparse.tokens.Keyword:
        return first_word
    return None


def parse_with_mode(sql, mode=ParserMode.MYSQL):
    """
    Parse a single SQL statement into a syntax tree.

    Schema statements (CREATE / ALTER / DROP / RENAME / TRUNCATE) go through
    the DDL grammar of the given dialect and come back as a DDLStatement.
    Other statements that start with an SQL statement keyword (SELECT,
    INSERT, SET, USE, ...) come back as an OtherStatement without further
    validation.

    Raises ParseError when the statement can not be parsed.
    """
    text = strip_sql_comments(sql, mode)
    if text.endswith(';'):
        text = text[:-1].rstrip()
    if not text:
        raise ParseError('syntax error at position 0: empty statement')

    first_word = text.split(None, 1)[0].upper()
    if first_word in DDL_KEYWORDS:
        try:
            return GRAMMARS[mode].parse_string(text, parse_all=True)[0]
        except ParseBaseException as e:
            raise ParseError(f'syntax error at position {e.loc}: {e.msg}', e.loc) from e

    kind = classify_statement(text)
    if kind is None:
        raise ParseError(f"syntax error at position 0: unrecognized statement '{first_word}'")
    logger.debug(f'{kind} statement is not a schema statement')
    return OtherStatement(kind=kind, text=text)
