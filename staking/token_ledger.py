from dataclasses import dataclass
import logging

from staking.derivation import Authority
from staking.exceptions import (
    AccountAlreadyExists,
    AccountNotFound,
    AssetMismatch,
    InsufficientFunds,
    OwnerMismatch,
    ZeroAmount,
)
from staking.math import check_uint64, checked_add


logger = logging.getLogger(__name__)


@dataclass
class TokenAccount:
    address: str
    asset_id: str
    owner: str
    amount: int = 0


class TokenLedger():
    """
    Custody accounts for the stake and reward assets.

    Every transfer checks all of its preconditions before moving anything,
    so a failed transfer leaves both accounts as they were.
    """

    def __init__(self) -> None:
        self.accounts = {}

    def create_account(self, address, asset_id, owner):
        if address in self.accounts:
            raise AccountAlreadyExists(address)

        account = TokenAccount(address=address, asset_id=asset_id, owner=owner)
        self.accounts[address] = account
        logger.debug("Created token account %s for asset %s owned by %s", address, asset_id, owner)
        return account

    def account_exists(self, address):
        return address in self.accounts

    def get_account(self, address):
        try:
            return self.accounts[address]
        except KeyError:
            raise AccountNotFound(address) from None

    def balance_of(self, address):
        return self.get_account(address).amount

    def mint_to(self, address, amount):
        check_uint64(amount)
        account = self.get_account(address)
        account.amount = checked_add(account.amount, amount)

    def _check_transfer(self, source, destination, amount):
        check_uint64(amount)
        if not amount:
            raise ZeroAmount("Transfer amount must be greater than zero")

        source_account = self.get_account(source)
        destination_account = self.get_account(destination)
        if source_account.asset_id != destination_account.asset_id:
            raise AssetMismatch(f"Cannot transfer {source_account.asset_id} into an account holding {destination_account.asset_id}")
        if source_account.amount < amount:
            raise InsufficientFunds(f"Account {source} holds {source_account.amount}, transfer needs {amount}")
        checked_add(destination_account.amount, amount)
        return source_account, destination_account

    def _move(self, source_account, destination_account, amount):
        source_account.amount -= amount
        destination_account.amount += amount
        logger.debug("Transferred %d %s from %s to %s", amount, source_account.asset_id, source_account.address, destination_account.address)

    def transfer_in(self, source, destination, amount, signer):
        source_account, destination_account = self._check_transfer(source, destination, amount)
        if signer is None or source_account.owner != signer.address:
            raise OwnerMismatch(f"Account {source} is owned by {source_account.owner}, not by the signer")

        self._move(source_account, destination_account, amount)

    def transfer_out(self, source, destination, amount, authority):
        source_account, destination_account = self._check_transfer(source, destination, amount)
        if not isinstance(authority, Authority) or not authority.verify():
            raise OwnerMismatch(f"Transfers out of {source} need its derived authority")
        if source_account.owner != authority.address:
            raise OwnerMismatch(f"Account {source} is owned by {source_account.owner}, not by {authority.address}")

        self._move(source_account, destination_account, amount)
