class DDLError(Exception):
    """Base class for failures to turn a statement into a schema model"""

    def __init__(self, message, statement=''):
        self.message = message
        self.statement = statement
        super().__init__(message)

    def __str__(self):
        if self.statement:
            return f'{self.message}: {self.statement}'
        return self.message


class SQLSyntaxError(DDLError):
    """The grammar rejected the statement"""


class UnsupportedStatementError(DDLError):
    def __init__(self, statement):
        super().__init__('unsupported type of SQL (only DDL is supported)', statement)


class UnsupportedActionError(DDLError):
    def __init__(self, action, statement):
        self.action = action
        super().__init__(
            "unsupported type of DDL action (only 'CREATE TABLE', 'CREATE INDEX', "
            f"'ALTER TABLE ADD INDEX' and 'ALTER TABLE ADD PRIMARY KEY' are supported) '{action}'",
            statement,
        )


class MissingIndexSpecError(DDLError):
    """A statement routed to index extraction carries no index specification.

    Only reachable when the dispatcher and the grammar disagree about which
    actions carry an index, so it signals a bug rather than bad input.
    """

    def __init__(self, action, statement=''):
        self.action = action
        super().__init__(f"no index specification on '{action}' statement", statement)


class MalformedNumericLiteralError(DDLError):
    def __init__(self, value_type, raw, statement=''):
        self.value_type = value_type
        self.raw = raw
        super().__init__(f"malformed {value_type.value} literal '{raw}'", statement)
