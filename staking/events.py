from algosdk import abi

from staking.event import Event


initialize_event = Event(
    name="initialize",
    args=[
        abi.Argument(arg_type="address", name="admin_address"),
        abi.Argument(arg_type="address", name="stake_asset_id"),
        abi.Argument(arg_type="address", name="reward_asset_id"),
        abi.Argument(arg_type="uint64", name="reward_rate"),
        abi.Argument(arg_type="bool", name="is_reset"),
    ]
)


state_event = Event(
    name="state",
    args=[
        abi.Argument(arg_type="uint64", name="last_update_time"),
        abi.Argument(arg_type="uint64", name="reward_rate"),
        abi.Argument(arg_type="uint64", name="reward_per_unit_stored"),
        abi.Argument(arg_type="uint64", name="total_staked"),
    ]
)


user_state_event = Event(
    name="user_state",
    args=[
        abi.Argument(arg_type="address", name="user_address"),
        abi.Argument(arg_type="uint64", name="balance"),
        abi.Argument(arg_type="uint64", name="reward_per_unit_paid"),
        abi.Argument(arg_type="uint64", name="accrued_reward"),
    ]
)


stake_event = Event(
    name="stake",
    args=[
        abi.Argument(arg_type="address", name="user_address"),
        abi.Argument(arg_type="uint64", name="amount"),
    ]
)


unstake_event = Event(
    name="unstake",
    args=[
        abi.Argument(arg_type="address", name="user_address"),
        abi.Argument(arg_type="uint64", name="amount"),
    ]
)


claim_event = Event(
    name="claim",
    args=[
        abi.Argument(arg_type="address", name="user_address"),
        abi.Argument(arg_type="uint64", name="amount"),
    ]
)


staking_events = [
    initialize_event,
    state_event,
    user_state_event,
    stake_event,
    unstake_event,
    claim_event,
]
