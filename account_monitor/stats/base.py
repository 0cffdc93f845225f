"""Shared pieces of the statistics engines."""
import enum
import uuid
from collections.abc import Iterable

from account_monitor.models.account import Account


class PreconditionError(RuntimeError):
    """An accessor was called before the matching ``init_*`` method."""


class NoDataAvailable(enum.Enum):
    """Marker for "nothing to compare"; a valid result, not an error."""

    NO_DATA = "no_data"


NO_DATA = NoDataAvailable.NO_DATA

AccountRef = Account | uuid.UUID


def account_ids(accounts: AccountRef | Iterable[AccountRef]) -> list[uuid.UUID]:
    """Normalise one account, one id, or an iterable of either into unique ids."""
    if isinstance(accounts, (Account, uuid.UUID)):
        accounts = [accounts]
    ids: list[uuid.UUID] = []
    for item in accounts:
        account_id = item.id if isinstance(item, Account) else item
        if account_id not in ids:
            ids.append(account_id)
    return ids
