"""Bot texts, commands, periods and account validation."""

from __future__ import annotations

import re
from datetime import timedelta
from enum import Enum


class _TextEnum(str, Enum):
    """String enum whose members print as their plain value."""

    def __str__(self) -> str:
        return self.value


class Command(_TextEnum):
    """Slash commands understood by the bot."""

    START = "/start"
    ADD = "/add"
    DEL = "/del"
    PRICE = "/price"
    CALC = "/calc"
    CONVERT = "/convert"
    NETWORK = "/network"
    CROSSING = "/crossing"
    FAUCET = "/faucet"
    THRESHOLD = "/threshold"
    INFO = "/info"
    P = "/p"
    C = "/c"
    PC = "/pc"


class Button(_TextEnum):
    """Labels of the keyboard buttons."""

    PRICES = "💵 Price"
    NETWORK = "💻 Network"
    CALC = "📃 Calc"
    CONVERT = "💱 Convert"
    INFO = "ℹ Info"
    BACK = "⬅ Back"
    REFRESH = "↪ Refresh"
    NEXT = "Next ⏩"
    PREV = "⏪ Prev"


class DbConfigKey(_TextEnum):
    """Names of the settings stored in the configuration table."""

    ORDINARY_FAUCET_AMOUNT = "ORDINARY_FAUCET_AMOUNT"
    NEW_USERS_EXTRA_FAUCET = "NEW_USERS_EXTRA_FAUCET"
    EXTRA_FAUCET_AMOUNT = "EXTRA_FAUCET_AMOUNT"


NAME = "<b>🚀 Signum Explorer Bot</b>"
VERSION = "<i>v.1.9.0</i>"

COMMAND_START = Command.START
COMMAND_ADD = Command.ADD
COMMAND_DEL = Command.DEL
COMMAND_PRICE = Command.PRICE
COMMAND_CALC = Command.CALC
COMMAND_CONVERT = Command.CONVERT
COMMAND_NETWORK = Command.NETWORK
COMMAND_CROSSING = Command.CROSSING
COMMAND_FAUCET = Command.FAUCET
COMMAND_THRESHOLD = Command.THRESHOLD
COMMAND_INFO = Command.INFO
COMMAND_P = Command.P
COMMAND_C = Command.C
COMMAND_PC = Command.PC

BUTTON_PRICES = Button.PRICES
BUTTON_NETWORK = Button.NETWORK
BUTTON_CALC = Button.CALC
BUTTON_CONVERT = Button.CONVERT
BUTTON_INFO = Button.INFO
BUTTON_BACK = Button.BACK
BUTTON_REFRESH = Button.REFRESH
BUTTON_NEXT = Button.NEXT
BUTTON_PREV = Button.PREV

_INSTRUCTIONS = (
    ("any <b>Signum Account</b> (S-XXXX-XXXX-XXXX-XXXXX or numeric ID)", "to explore it once."),
    (
        f"<b>{Command.ADD} ACCOUNT [ALIAS]</b>",
        f"to constantly add an account into your main menu and <b>{Command.DEL} [ACCOUNT or ALIAS]</b>"
        " to remove it from there.",
    ),
    (f"<b>{Command.THRESHOLD} [AMOUNT of SIGNA]</b>", "to set a lower threshold for notifications."),
    (
        f"<b>{Command.CALC} TiB COMMITMENT</b>",
        f"(or just <b>{Command.CALC} TiB</b>) to calculate your expected mining rewards.",
    ),
    (f"<b>{Command.PRICE}</b>", "to get up-to-date currency quotes."),
    (f"<b>{Command.CONVERT}</b>", "for currency converter SIGNA / USD / BTC"),
    (f"<b>{Command.NETWORK}</b>", "to get Signum Network statistic."),
    (
        f"<b>{Command.CROSSING}</b>",
        "to check your plots crossing (they should not overlap to maximize mining profit).",
    ),
    (f"<b>{Command.FAUCET}</b>", "to get some free SIGNA."),
    (f"<b>{Command.INFO}</b>", "for information."),
)

INSTRUCTION_TEXT = "\n" + "".join(f"Send {what} {purpose}\n" for what, purpose in _INSTRUCTIONS)

DAY = timedelta(days=1)
WEEK = DAY * 7
MONTH = DAY * 30
ALL = MONTH * 1200

DB_CONFIG_ORDINARY_FAUCET_AMOUNT = DbConfigKey.ORDINARY_FAUCET_AMOUNT
DB_CONFIG_NEW_USERS_EXTRA_FAUCET = DbConfigKey.NEW_USERS_EXTRA_FAUCET
DB_CONFIG_EXTRA_FAUCET_AMOUNT = DbConfigKey.EXTRA_FAUCET_AMOUNT

FAUCET_ACCOUNT = "S-8N2F-TDD7-4LY6-64FZ7"
FAUCET_DAYS_PERIOD = 7

_NUMERIC_ACCOUNT = re.compile(r"\d+", re.ASCII)
_REED_SOLOMON_ACCOUNT = re.compile(r"(?:S|BURST)(?:-[A-Z0-9]{4}){3}-[A-Z0-9]{5}")


def is_valid_account(value: str) -> bool:
    """True if ``value`` is a numeric account id."""
    return _NUMERIC_ACCOUNT.fullmatch(value) is not None


def is_valid_account_rs(value: str) -> bool:
    """True if ``value`` is a Reed-Solomon account address."""
    return _REED_SOLOMON_ACCOUNT.fullmatch(value) is not None