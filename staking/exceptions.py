class StakingError(Exception):
    pass


class ZeroAmount(StakingError):
    pass


class InsufficientBalance(StakingError):
    def __init__(self, balance, amount):
        self.balance = balance
        self.amount = amount
        super().__init__(f"Cannot unstake more than staked. Staked: {balance}, trying to withdraw: {amount}")


class Unauthorized(StakingError):
    pass


class AddressMismatch(StakingError):
    def __init__(self, name, passed, computed):
        self.name = name
        self.passed = passed
        self.computed = computed
        super().__init__(f"{name} passed: {passed}, computed: {computed}")


class EscrowOwnershipMismatch(StakingError):
    def __init__(self, escrow, owner, expected_owner):
        self.escrow = escrow
        self.owner = owner
        self.expected_owner = expected_owner
        super().__init__(f"Escrow {escrow} must have the derived authority as owner. Current owner {owner}, authority {expected_owner}")


class ArithmeticFault(StakingError):
    pass


class RecordNotInitialized(StakingError):
    def __init__(self, address):
        self.address = address
        super().__init__(f"Record {address} is not initialized")


class ResetNotAllowed(StakingError):
    pass


class InvalidInstruction(StakingError):
    pass


class TransferError(StakingError):
    pass


class AccountNotFound(TransferError):
    def __init__(self, address):
        self.address = address
        super().__init__(f"Token account {address} does not exist")


class AccountAlreadyExists(TransferError):
    def __init__(self, address):
        self.address = address
        super().__init__(f"Token account {address} already exists")


class InsufficientFunds(TransferError):
    pass


class AssetMismatch(TransferError):
    pass


class OwnerMismatch(TransferError):
    pass
