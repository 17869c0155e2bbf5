from staking.exceptions import RecordNotInitialized
from staking.instructions import Claim, Initialize, Stake, Unstake, encode_instruction
from staking.signer import sign_instruction


class StakingClient():
    def __init__(self, processor, user_address, user_sk) -> None:
        self.processor = processor
        self.controller = processor.controller
        self.derivation = self.controller.derivation
        self.user_address = user_address
        self.keys = {}
        self.add_key(user_address, user_sk)
        self.current_timestamp = None

    def add_key(self, address, key):
        self.keys[address] = key

    def get_current_timestamp(self):
        return self.current_timestamp or self.processor.clock.now()

    def _submit(self, instruction, accounts):
        instruction_data = encode_instruction(instruction)
        signature = sign_instruction(instruction_data, self.keys[accounts[0]])
        return self.processor.process(instruction_data, accounts, signature)

    def get_pool_address(self, stake_asset_id, reward_asset_id):
        return self.derivation.find_pool_address(stake_asset_id, reward_asset_id)[0]

    def get_user_state_address(self, pool_address, account_address=None):
        account_address = account_address or self.user_address
        return self.derivation.find_user_state_address(pool_address, account_address)[0]

    def get_stake_escrow_address(self, pool_address):
        pool = self.get_pool(pool_address)
        return self.derivation.find_stake_escrow_address(pool.stake_asset_id)[0]

    def get_reward_escrow_address(self, pool_address):
        pool = self.get_pool(pool_address)
        return self.derivation.find_reward_escrow_address(pool.reward_asset_id)[0]

    def get_pool(self, pool_address):
        return self.controller.get_pool(pool_address)

    def get_user_state(self, pool_address, account_address=None):
        return self.controller.get_user_state(self.get_user_state_address(pool_address, account_address))

    def user_state_exists(self, pool_address, account_address=None):
        try:
            self.get_user_state(pool_address, account_address)
            return True
        except RecordNotInitialized:
            return False

    def get_pending_reward(self, pool_address, account_address=None):
        account_address = account_address or self.user_address
        return self.controller.pending_reward(pool_address, account_address, self.get_current_timestamp())

    def initialize(self, stake_asset_id, reward_asset_id, reward_rate):
        accounts = [
            self.user_address,
            self.get_pool_address(stake_asset_id, reward_asset_id),
            self.derivation.find_stake_escrow_address(stake_asset_id)[0],
            self.derivation.find_reward_escrow_address(reward_asset_id)[0],
        ]
        return self._submit(Initialize(stake_asset_id, reward_asset_id, reward_rate), accounts)

    def stake(self, pool_address, amount: int, source):
        accounts = [
            self.user_address,
            source,
            self.get_stake_escrow_address(pool_address),
            self.get_user_state_address(pool_address),
            pool_address,
        ]
        return self._submit(Stake(amount), accounts)

    def unstake(self, pool_address, amount: int, destination):
        accounts = [
            self.user_address,
            destination,
            self.get_user_state_address(pool_address),
            pool_address,
            self.get_stake_escrow_address(pool_address),
        ]
        return self._submit(Unstake(amount), accounts)

    def claim(self, pool_address, destination):
        accounts = [
            self.user_address,
            destination,
            self.get_user_state_address(pool_address),
            pool_address,
            self.get_reward_escrow_address(pool_address),
        ]
        return self._submit(Claim(), accounts)
