from dataclasses import replace
import unittest

from algosdk.account import generate_account
from algosdk.encoding import decode_address, is_valid_address
from nacl.bindings import crypto_core_ed25519_is_valid_point

from staking.constants import REWARDS_TOKEN_SEED, STAKING_POOL_SEED, STAKING_TOKEN_SEED
from staking.derivation import AddressDerivation


class AddressDerivationTests(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        super().setUpClass()
        cls.program_id = generate_account()[1]
        cls.stake_asset_id = generate_account()[1]
        cls.reward_asset_id = generate_account()[1]

    def setUp(self):
        super().setUp()
        self.derivation = AddressDerivation(self.program_id)

    def test_derive_is_deterministic(self):
        seeds = [decode_address(self.stake_asset_id)]

        address, bump = self.derivation.derive(seeds, STAKING_TOKEN_SEED)

        self.assertTrue(is_valid_address(address))
        self.assertTrue(0 <= bump <= 255)
        self.assertEqual(AddressDerivation(self.program_id).derive(seeds, STAKING_TOKEN_SEED), (address, bump))

    def test_derived_address_is_not_a_public_key(self):
        address, bump = self.derivation.find_pool_address(self.stake_asset_id, self.reward_asset_id)

        self.assertFalse(crypto_core_ed25519_is_valid_point(decode_address(address)))

    def test_derive_depends_on_namespace(self):
        seeds = [decode_address(self.stake_asset_id)]

        self.assertNotEqual(
            self.derivation.derive(seeds, STAKING_TOKEN_SEED)[0],
            self.derivation.derive(seeds, REWARDS_TOKEN_SEED)[0],
        )

    def test_derive_depends_on_program_id(self):
        other_derivation = AddressDerivation(generate_account()[1])

        self.assertNotEqual(
            self.derivation.find_stake_escrow_address(self.stake_asset_id)[0],
            other_derivation.find_stake_escrow_address(self.stake_asset_id)[0],
        )

    def test_pool_address_depends_on_asset_order(self):
        self.assertNotEqual(
            self.derivation.find_pool_address(self.stake_asset_id, self.reward_asset_id)[0],
            self.derivation.find_pool_address(self.reward_asset_id, self.stake_asset_id)[0],
        )

    def test_find_pool_address(self):
        seeds = [decode_address(self.stake_asset_id), decode_address(self.reward_asset_id)]

        self.assertEqual(
            self.derivation.find_pool_address(self.stake_asset_id, self.reward_asset_id),
            self.derivation.derive(seeds, STAKING_POOL_SEED),
        )

    def test_user_state_address_per_user(self):
        pool_address = self.derivation.find_pool_address(self.stake_asset_id, self.reward_asset_id)[0]

        self.assertNotEqual(
            self.derivation.find_user_state_address(pool_address, generate_account()[1])[0],
            self.derivation.find_user_state_address(pool_address, generate_account()[1])[0],
        )

    def test_authority(self):
        authority = self.derivation.stake_escrow_authority(self.stake_asset_id)

        self.assertEqual((authority.address, authority.bump), self.derivation.find_stake_escrow_address(self.stake_asset_id))
        self.assertTrue(authority.verify())

    def test_authority_fail_verify_after_tampering(self):
        authority = self.derivation.reward_escrow_authority(self.reward_asset_id)

        self.assertFalse(replace(authority, address=generate_account()[1]).verify())
        self.assertFalse(replace(authority, bump=(authority.bump + 1) % 256).verify())
        self.assertFalse(replace(authority, namespace=STAKING_TOKEN_SEED).verify())
