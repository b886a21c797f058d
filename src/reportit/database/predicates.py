"""Translation of domain predicates into SQLAlchemy filter expressions."""

from sqlalchemy import String, and_, false, or_, true
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.elements import ColumnElement
from sqlalchemy.sql.functions import GenericFunction

from reportit.database.models import SQLITE_LOWER_FUNCTION, Transaction, TransactionSplit
from reportit.domain.entities import TransactionStatus
from reportit.domain.filters import (
    AccountIn,
    AllOf,
    AmountSign,
    AnyOf,
    CategoryIn,
    DateBetween,
    NotTransfer,
    NotVoid,
    OwnerIs,
    PayeeIn,
    Predicate,
    TextContains,
)


class text_lower(GenericFunction):
    """Lower-case a text column the same way Python's str.lower does."""

    type = String()
    inherit_cache = True


@compiles(text_lower)
def _compile_text_lower(element, compiler, **kw):
    return "lower(%s)" % compiler.process(element.clauses, **kw)


@compiles(text_lower, "sqlite")
def _compile_text_lower_sqlite(element, compiler, **kw):
    return "%s(%s)" % (SQLITE_LOWER_FUNCTION, compiler.process(element.clauses, **kw))


def compile_predicate(predicate: Predicate) -> ColumnElement[bool]:
    """Build a WHERE expression over the transactions table.

    Split categories are matched with an EXISTS subquery so that an entry
    is never returned more than once.

    Raises:
        TypeError: If the predicate type is not supported
    """
    if isinstance(predicate, AllOf):
        return and_(true(), *(compile_predicate(c) for c in predicate.clauses))

    if isinstance(predicate, AnyOf):
        return or_(false(), *(compile_predicate(c) for c in predicate.clauses))

    if isinstance(predicate, OwnerIs):
        return Transaction.user_id == predicate.owner_id

    if isinstance(predicate, DateBetween):
        conditions = []
        if predicate.start is not None:
            conditions.append(Transaction.transaction_date >= predicate.start)
        if predicate.end is not None:
            conditions.append(Transaction.transaction_date <= predicate.end)
        return and_(true(), *conditions)

    if isinstance(predicate, NotVoid):
        return Transaction.status != TransactionStatus.VOID.value

    if isinstance(predicate, AccountIn):
        return Transaction.account_id.in_(predicate.account_ids)

    if isinstance(predicate, CategoryIn):
        return or_(
            Transaction.category_id.in_(predicate.category_ids),
            Transaction.splits.any(TransactionSplit.category_id.in_(predicate.category_ids)),
        )

    if isinstance(predicate, PayeeIn):
        return Transaction.payee_id.in_(predicate.payee_ids)

    if isinstance(predicate, TextContains):
        return or_(
            text_lower(Transaction.payee_name).contains(predicate.text, autoescape=True),
            text_lower(Transaction.description).contains(predicate.text, autoescape=True),
        )

    if isinstance(predicate, AmountSign):
        if predicate.positive:
            return Transaction.amount > 0
        return Transaction.amount < 0

    if isinstance(predicate, NotTransfer):
        return Transaction.is_transfer.is_(False)

    raise TypeError(f"Unsupported predicate: {type(predicate).__name__}")
