from dataclasses import dataclass, field

from algosdk.encoding import checksum, decode_address, encode_address
from nacl.bindings import crypto_core_ed25519_is_valid_point

from staking.constants import (
    DERIVED_ADDRESS_PREFIX,
    MAX_BUMP_SEED,
    REWARDS_TOKEN_SEED,
    STAKING_POOL_SEED,
    STAKING_TOKEN_SEED,
    USER_STATE_SEED,
)


@dataclass(frozen=True)
class Authority:
    """
    Signing capability of a derived address.

    Only the derivation that computed the address hands these out, and a
    token ledger only accepts them for outbound transfers after asking the
    issuer to confirm the seeds still lead to the same address.
    """
    address: str
    bump: int
    seeds: tuple
    namespace: bytes
    issuer: "AddressDerivation" = field(repr=False, compare=False)

    def verify(self):
        return self.issuer.derive(self.seeds, self.namespace) == (self.address, self.bump)


class AddressDerivation():
    def __init__(self, program_id: str) -> None:
        self.program_id = program_id
        self._program_id_bytes = decode_address(program_id)

    def create_address(self, seeds, namespace, bump):
        data = b"".join(seeds) + namespace + bytes([bump]) + self._program_id_bytes + DERIVED_ADDRESS_PREFIX
        return checksum(data)

    def derive(self, seeds, namespace):
        # Walk the bump down until the digest is not a usable ed25519 public key,
        # so nobody can hold a private key for a derived address.
        seeds = tuple(seeds)
        for bump in range(MAX_BUMP_SEED, -1, -1):
            candidate = self.create_address(seeds, namespace, bump)
            if not crypto_core_ed25519_is_valid_point(candidate):
                return encode_address(candidate), bump
        raise ValueError("Unable to find a viable bump seed")

    def authority(self, seeds, namespace):
        seeds = tuple(seeds)
        address, bump = self.derive(seeds, namespace)
        return Authority(address=address, bump=bump, seeds=seeds, namespace=namespace, issuer=self)

    def pool_seeds(self, stake_asset_id, reward_asset_id):
        return (decode_address(stake_asset_id), decode_address(reward_asset_id))

    def stake_escrow_seeds(self, stake_asset_id):
        return (decode_address(stake_asset_id),)

    def reward_escrow_seeds(self, reward_asset_id):
        return (decode_address(reward_asset_id),)

    def user_state_seeds(self, pool_address, user_address):
        return (decode_address(pool_address), decode_address(user_address))

    def find_pool_address(self, stake_asset_id, reward_asset_id):
        return self.derive(self.pool_seeds(stake_asset_id, reward_asset_id), STAKING_POOL_SEED)

    def find_stake_escrow_address(self, stake_asset_id):
        return self.derive(self.stake_escrow_seeds(stake_asset_id), STAKING_TOKEN_SEED)

    def find_reward_escrow_address(self, reward_asset_id):
        return self.derive(self.reward_escrow_seeds(reward_asset_id), REWARDS_TOKEN_SEED)

    def find_user_state_address(self, pool_address, user_address):
        return self.derive(self.user_state_seeds(pool_address, user_address), USER_STATE_SEED)

    def stake_escrow_authority(self, stake_asset_id):
        return self.authority(self.stake_escrow_seeds(stake_asset_id), STAKING_TOKEN_SEED)

    def reward_escrow_authority(self, reward_asset_id):
        return self.authority(self.reward_escrow_seeds(reward_asset_id), REWARDS_TOKEN_SEED)
