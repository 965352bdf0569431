"""Expected mining rewards for a given capacity and commitment."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .signum.models import MiningInfo

P = 0.4515449935
MIN_MULTIPLIER = 0.125
MAX_MULTIPLIER = 8.0
DAYS_PER_MONTH = 30.4
MULTIPLIERS = (0.125, 0.25, 0.5, 1.0, 2.0, 4.0, 8.0)
REINVEST_EVERY_DAYS = 7.0


@dataclass
class CalcResult:
    tib: float = 0.0
    commitment: float = 0.0
    my_commitment_per_tib: float = 0.0
    capacity_multiplier: float = 0.0
    effective_capacity: float = 0.0
    my_daily: float = 0.0
    my_monthly: float = 0.0
    my_yearly: float = 0.0


@dataclass
class ReinvestmentResult:
    reinvest_every_days: float
    accumulated_commitment: float
    accumulated_commitment_percent: int
    daily_after_year: float
    daily_after_year_percent: int
    monthly_after_year: float
    yearly_after_year: float


def _clamp_multiplier(value: float) -> float:
    return max(MIN_MULTIPLIER, min(MAX_MULTIPLIER, value))


def _reward_per_day(mining_info: MiningInfo) -> float:
    return 360 / mining_info.average_network_difficulty * mining_info.last_block_reward


def calculate(mining_info: MiningInfo, tib: float, commit: float) -> CalcResult:
    """Rewards for ``tib`` TiB of plots backed by ``commit`` SIGNA."""
    per_tib = commit / tib
    multiplier = _clamp_multiplier(math.pow(per_tib / mining_info.average_commitment, P))
    effective = multiplier * tib
    daily = _reward_per_day(mining_info) * effective
    monthly = daily * DAYS_PER_MONTH
    return CalcResult(
        tib=tib,
        commitment=commit,
        my_commitment_per_tib=per_tib,
        capacity_multiplier=multiplier,
        effective_capacity=effective,
        my_daily=daily,
        my_monthly=monthly,
        my_yearly=monthly * 12,
    )


def reverse_calculate(
    mining_info: MiningInfo, my_daily: float, commit: float
) -> tuple[float, float]:
    """The capacity and multiplier that earn ``my_daily`` with ``commit`` SIGNA."""
    effective = my_daily / _reward_per_day(mining_info)
    tib = math.pow(
        math.pow(commit, P) / math.pow(mining_info.average_commitment, P) / effective,
        1 / (P - 1),
    )
    multiplier = _clamp_multiplier(effective / tib)
    return effective / multiplier, multiplier


def calculate_entire_range(mining_info: MiningInfo, tib: float) -> dict[float, CalcResult]:
    """Commitment needed and monthly reward for each capacity multiplier."""
    per_day = _reward_per_day(mining_info)
    result = {}
    for multiplier in MULTIPLIERS:
        commitment = 0.0
        if multiplier > MIN_MULTIPLIER:
            commitment = math.pow(multiplier, 1 / P) * mining_info.average_commitment * tib
        result[multiplier] = CalcResult(
            my_monthly=per_day * multiplier * tib * DAYS_PER_MONTH,
            commitment=commitment,
        )
    return result


def calculate_reinvestment(
    mining_info: MiningInfo, calc_result: CalcResult
) -> ReinvestmentResult:
    """Outcome after a year of adding all rewards to the commitment every week."""
    current = calc_result
    for _ in range(int(365 / REINVEST_EVERY_DAYS)):
        current = calculate(
            mining_info,
            current.tib,
            current.commitment + current.my_daily * REINVEST_EVERY_DAYS,
        )
    return ReinvestmentResult(
        reinvest_every_days=REINVEST_EVERY_DAYS,
        accumulated_commitment=current.commitment,
        accumulated_commitment_percent=int(
            (current.commitment - calc_result.commitment) * 100 / calc_result.commitment
        ),
        daily_after_year=current.my_daily,
        daily_after_year_percent=int(
            (current.my_daily - calc_result.my_daily) * 100 / calc_result.my_daily
        ),
        monthly_after_year=current.my_monthly,
        yearly_after_year=current.my_yearly,
    )