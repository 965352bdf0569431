"""Data types for Signum node requests and answers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Mapping

from ..common import NQT_PER_SIGNA

DEFAULT_DEADLINE = 1440

MINIMUM_FEE = 1_000_000
DEFAULT_CHEAP_FEE = 2_000_000
DEFAULT_STANDARD_FEE = 3_000_000
DEFAULT_PRIORITY_FEE = 4_000_000


class RequestType(str, Enum):
    SEND_MONEY = "sendMoney"
    SEND_MONEY_MULTI = "sendMoneyMulti"
    SEND_MONEY_MULTI_SAME = "sendMoneyMultiSame"
    SEND_MESSAGE = "sendMessage"
    READ_MESSAGE = "readMessage"
    SUGGEST_FEE = "suggestFee"
    GET_ACCOUNT = "getAccount"
    GET_AT_DETAILS = "getATDetails"
    GET_TRANSACTION = "getTransaction"
    GET_BLOCK = "getBlock"
    GET_ACCOUNT_ID = "getAccountId"
    GET_ACCOUNT_BLOCKS = "getAccountBlocks"
    GET_ACCOUNT_TRANSACTIONS = "getAccountTransactions"
    GET_UNCONFIRMED_TRANSACTIONS = "getUnconfirmedTransactions"
    GET_MINING_INFO = "getMiningInfo"
    GET_BLOCKCHAIN_STATUS = "getBlockchainStatus"
    GET_REWARD_RECIPIENT = "getRewardRecipient"
    SET_REWARD_RECIPIENT = "setRewardRecipient"
    ADD_COMMITMENT = "addCommitment"
    REMOVE_COMMITMENT = "removeCommitment"
    SET_ACCOUNT_INFO = "setAccountInfo"
    GENERATE_SEND_TRANSACTION_QR_CODE = "generateSendTransactionQRCode"
    CREATE_AT_PROGRAM = "createATProgram"
    DECRYPT_FROM = "decryptFrom"
    GET_INDIRECT_INCOMING = "getIndirectIncoming"
    GET_ASSET = "getAsset"


class TransactionType(IntEnum):
    PAYMENT = 0
    MESSAGING = 1
    TOKENIZATION = 2
    DIGITAL_GOODS = 3
    ACCOUNT_CONTROL = 4
    BURST_MINING = 20
    ADVANCED_PAYMENT = 21
    AUTOMATED_TRANSACTIONS = 22


class PaymentSubtype(IntEnum):
    ORDINARY = 0
    MULTI_OUT = 1
    MULTI_OUT_SAME = 2
    ALL_TYPES = 3


class MiningSubtype(IntEnum):
    REWARD_RECIPIENT_ASSIGNMENT = 0
    ADD_COMMITMENT = 1
    REMOVE_COMMITMENT = 2
    ALL_TYPES = 3


class MessagingSubtype(IntEnum):
    ARBITRARY_MESSAGE = 0


class AutomatedTransactionSubtype(IntEnum):
    AT_PAYMENT = 1


class TokenizationSubtype(IntEnum):
    DISTRIBUTION_TO_HOLDER = 8


def _mapping(data: Any) -> Mapping[str, Any]:
    return data if isinstance(data, Mapping) else {}


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return "" if value is None else str(value)


def _int(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        raise ValueError(f"invalid integer for {key!r}: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"invalid integer for {key!r}: {value!r}") from exc


def _bool(data: Mapping[str, Any], key: str) -> bool:
    value = data.get(key)
    if isinstance(value, str):
        return value.lower() == "true"
    return bool(value)


@dataclass
class Account:
    name: str = ""
    account: str = ""
    account_rs: str = ""
    total_balance_nqt: int = 0
    available_balance_nqt: int = 0
    committed_balance_nqt: int = 0
    error_description: str = ""

    @classmethod
    def from_json(cls, data: Any) -> "Account":
        data = _mapping(data)
        return cls(
            name=_text(data, "name"),
            account=_text(data, "account"),
            account_rs=_text(data, "accountRS"),
            total_balance_nqt=_int(data, "balanceNQT"),
            available_balance_nqt=_int(data, "unconfirmedBalanceNQT"),
            committed_balance_nqt=_int(data, "committedBalanceNQT"),
            error_description=_text(data, "errorDescription"),
        )


@dataclass
class Block:
    block: str = ""
    timestamp: int = 0
    height: int = 0
    block_reward: str = ""
    error_description: str = ""

    @classmethod
    def from_json(cls, data: Any) -> "Block":
        data = _mapping(data)
        return cls(
            block=_text(data, "block"),
            timestamp=_int(data, "timestamp"),
            height=_int(data, "height"),
            block_reward=_text(data, "blockReward"),
            error_description=_text(data, "errorDescription"),
        )


@dataclass
class AccountBlocks:
    blocks: list[Block] = field(default_factory=list)
    error_description: str = ""

    @classmethod
    def from_json(cls, data: Any) -> "AccountBlocks":
        data = _mapping(data)
        return cls(
            blocks=[Block.from_json(item) for item in data.get("blocks") or []],
            error_description=_text(data, "errorDescription"),
        )


@dataclass
class Attachment:
    recipients: list[Any] = field(default_factory=list)
    amount_nqt: int = 0
    message: str = ""
    message_is_text: bool = False
    encrypted_message: Any = None
    asset: str = ""

    @classmethod
    def from_json(cls, data: Any) -> "Attachment":
        data = _mapping(data)
        return cls(
            recipients=list(data.get("recipients") or []),
            amount_nqt=_int(data, "amountNQT"),
            message=_text(data, "message"),
            message_is_text=_bool(data, "messageIsText"),
            encrypted_message=data.get("encryptedMessage"),
            asset=_text(data, "asset"),
        )


@dataclass
class Transaction:
    transaction_id: str = ""
    type: int = TransactionType.PAYMENT
    subtype: int = 0
    timestamp: int = 0
    recipient: str = ""
    recipient_rs: str = ""
    amount_nqt: int = 0
    fee_nqt: int = 0
    sender: str = ""
    sender_rs: str = ""
    height: int = 0
    attachment: Attachment = field(default_factory=Attachment)
    error_description: str = ""

    @classmethod
    def from_json(cls, data: Any) -> "Transaction":
        data = _mapping(data)
        return cls(
            transaction_id=_text(data, "transaction"),
            type=_int(data, "type"),
            subtype=_int(data, "subtype"),
            timestamp=_int(data, "timestamp"),
            recipient=_text(data, "recipient"),
            recipient_rs=_text(data, "recipientRS"),
            amount_nqt=_int(data, "amountNQT"),
            fee_nqt=_int(data, "feeNQT"),
            sender=_text(data, "sender"),
            sender_rs=_text(data, "senderRS"),
            height=_int(data, "height"),
            attachment=Attachment.from_json(data.get("attachment")),
            error_description=_text(data, "errorDescription"),
        )

    @property
    def amount(self) -> float:
        """The amount in SIGNA."""
        return self.amount_nqt / NQT_PER_SIGNA

    @property
    def multi_out_same_amount_nqt(self) -> int:
        """The amount each recipient of a multi-out-same payment gets, in NQT."""
        return self.amount_nqt // len(self.attachment.recipients)

    @property
    def multi_out_same_amount(self) -> float:
        return self.multi_out_same_amount_nqt / NQT_PER_SIGNA

    def my_multi_out_amount_nqt(self, account: str) -> int:
        """The amount ``account`` gets from a multi-out payment, in NQT, or 0."""
        for entry in self.attachment.recipients:
            if not isinstance(entry, (list, tuple)) or len(entry) < 2:
                continue
            recipient, amount = entry[0], entry[1]
            if not isinstance(recipient, str) or recipient != account:
                continue
            if not isinstance(amount, str) or not amount.isdigit():
                continue
            return int(amount)
        return 0

    def my_multi_out_amount(self, account: str) -> float:
        return self.my_multi_out_amount_nqt(account) / NQT_PER_SIGNA


@dataclass
class AccountTransactions:
    transactions: list[Transaction] = field(default_factory=list)
    error_description: str = ""

    @classmethod
    def from_json(cls, data: Any) -> "AccountTransactions":
        data = _mapping(data)
        return cls(
            transactions=[Transaction.from_json(item) for item in data.get("transactions") or []],
            error_description=_text(data, "errorDescription"),
        )


@dataclass
class UnconfirmedTransactions:
    unconfirmed_transactions: list[Transaction] = field(default_factory=list)
    error_description: str = ""

    @classmethod
    def from_json(cls, data: Any) -> "UnconfirmedTransactions":
        data = _mapping(data)
        return cls(
            unconfirmed_transactions=[
                Transaction.from_json(item) for item in data.get("unconfirmedTransactions") or []
            ],
            error_description=_text(data, "errorDescription"),
        )


@dataclass
class MiningInfo:
    height: int = 0
    base_target: int = 0
    last_block_reward: int = 0
    average_commitment_nqt: int = 0
    timestamp: int = 0
    actual_network_difficulty: float = 0.0
    actual_commitment: float = 0.0
    average_network_difficulty: float = 0.0
    average_commitment: float = 0.0
    error_description: str = ""

    @classmethod
    def from_json(cls, data: Any) -> "MiningInfo":
        """Read the node's fields; the derived difficulty and commitment stay zero."""
        data = _mapping(data)
        return cls(
            height=_int(data, "height"),
            base_target=_int(data, "baseTarget"),
            last_block_reward=_int(data, "lastBlockReward"),
            average_commitment_nqt=_int(data, "averageCommitmentNQT"),
            timestamp=_int(data, "timestamp"),
            error_description=_text(data, "errorDescription"),
        )


def default_mining_info() -> MiningInfo:
    """Mining figures used until the network has been sampled."""
    difficulty = 18325193796 / 280000 / 1.83
    return MiningInfo(
        height=927000,
        base_target=280000,
        last_block_reward=127,
        average_commitment_nqt=2500 * 10**8,
        actual_network_difficulty=difficulty,
        actual_commitment=2500.0,
        average_network_difficulty=difficulty,
        average_commitment=2500.0,
    )


@dataclass
class BlockchainStatus:
    number_of_blocks: int = 0
    error_description: str = ""

    @classmethod
    def from_json(cls, data: Any) -> "BlockchainStatus":
        data = _mapping(data)
        return cls(
            number_of_blocks=_int(data, "numberOfBlocks"),
            error_description=_text(data, "errorDescription"),
        )


@dataclass
class SuggestFee:
    minimum: int = MINIMUM_FEE
    cheap: int = 0
    standard: int = 0
    priority: int = 0
    error_description: str = ""

    @classmethod
    def from_json(cls, data: Any) -> "SuggestFee":
        data = _mapping(data)
        return cls(
            minimum=MINIMUM_FEE,
            cheap=_int(data, "cheap"),
            standard=_int(data, "standard"),
            priority=_int(data, "priority"),
            error_description=_text(data, "errorDescription"),
        )


@dataclass
class ATDetails:
    at: str = ""
    machine_data: str = ""
    balance_nqt: int = 0
    next_block: int = 0
    name: str = ""
    error_description: str = ""

    @classmethod
    def from_json(cls, data: Any) -> "ATDetails":
        data = _mapping(data)
        return cls(
            at=_text(data, "at"),
            machine_data=_text(data, "machineData"),
            balance_nqt=_int(data, "balanceNQT"),
            next_block=_int(data, "nextBlock"),
            name=_text(data, "name"),
            error_description=_text(data, "errorDescription"),
        )


@dataclass
class Asset:
    account: str = ""
    account_rs: str = ""
    public_key: str = ""
    name: str = ""
    description: str = ""
    decimals: int = 0
    mintable: bool = False
    quantity_qnt: str = ""
    quantity_burnt_qnt: str = ""
    asset: str = ""
    quantity_circulating_qnt: str = ""
    number_of_trades: int = 0
    number_of_transfers: int = 0
    number_of_accounts: int = 0
    volume_qnt: str = ""
    price_high: str = ""
    price_low: str = ""
    price_open: str = ""
    price_close: str = ""
    error_description: str = ""

    @classmethod
    def from_json(cls, data: Any) -> "Asset":
        data = _mapping(data)
        return cls(
            account=_text(data, "account"),
            account_rs=_text(data, "accountRS"),
            public_key=_text(data, "publicKey"),
            name=_text(data, "name"),
            description=_text(data, "description"),
            decimals=_int(data, "decimals"),
            mintable=_bool(data, "mintable"),
            quantity_qnt=_text(data, "quantityQNT"),
            quantity_burnt_qnt=_text(data, "quantityBurntQNT"),
            asset=_text(data, "asset"),
            quantity_circulating_qnt=_text(data, "quantityCirculatingQNT"),
            number_of_trades=_int(data, "numberOfTrades"),
            number_of_transfers=_int(data, "numberOfTransfers"),
            number_of_accounts=_int(data, "numberOfAccounts"),
            volume_qnt=_text(data, "volumeQNT"),
            price_high=_text(data, "priceHigh"),
            price_low=_text(data, "priceLow"),
            price_open=_text(data, "priceOpen"),
            price_close=_text(data, "priceClose"),
            error_description=_text(data, "errorDescription"),
        )


@dataclass
class DistributionAmount:
    amount_nqt: int = 0
    quantity_qnt: int = 0
    height: int = 0
    confirmations: int = 0
    error_description: str = ""

    @classmethod
    def from_json(cls, data: Any) -> "DistributionAmount":
        data = _mapping(data)
        return cls(
            amount_nqt=_int(data, "amountNQT"),
            quantity_qnt=_int(data, "quantityQNT"),
            height=_int(data, "height"),
            confirmations=_int(data, "confirmations"),
            error_description=_text(data, "errorDescription"),
        )

    @property
    def amount(self) -> float:
        """The distributed amount in SIGNA."""
        return self.amount_nqt / NQT_PER_SIGNA


@dataclass
class DecryptedFrom:
    decrypted_message: str = ""
    error_description: str = ""

    @classmethod
    def from_json(cls, data: Any) -> "DecryptedFrom":
        data = _mapping(data)
        return cls(
            decrypted_message=_text(data, "decryptedMessage"),
            error_description=_text(data, "errorDescription"),
        )


@dataclass
class Message:
    message: str = ""
    decrypted_message: str = ""
    decrypted_message_to_self: str = ""
    error_description: str = ""

    @classmethod
    def from_json(cls, data: Any) -> "Message":
        data = _mapping(data)
        return cls(
            message=_text(data, "message"),
            decrypted_message=_text(data, "decryptedMessage"),
            decrypted_message_to_self=_text(data, "decryptedMessageToSelf"),
            error_description=_text(data, "errorDescription"),
        )


@dataclass
class RewardRecipient:
    reward_recipient: str = ""
    error_description: str = ""

    @classmethod
    def from_json(cls, data: Any) -> "RewardRecipient":
        data = _mapping(data)
        return cls(
            reward_recipient=_text(data, "rewardRecipient"),
            error_description=_text(data, "errorDescription"),
        )


def _flag(value: bool) -> str:
    return "true" if value else "false"


@dataclass
class TransactionRequest:
    """The parameters of a transaction to be signed and broadcast by a node."""

    request_type: RequestType | str
    secret_phrase: str = ""
    recipient: str = ""
    recipients: str = ""
    name: str = ""
    description: str = ""
    amount_nqt: int = 0
    fee_nqt: int = 0
    deadline: int = 0
    message: str = ""
    message_is_text: bool = False
    message_to_encrypt: str = ""
    message_to_encrypt_is_text: bool = False
    code: str = ""
    data: str = ""
    dpages: str = ""
    cspages: str = ""
    uspages: str = ""
    referenced_transaction_full_hash: str = ""
    min_activation_amount_nqt: int = 0

    def to_params(self) -> dict[str, str]:
        """Build the query parameters; raises ValueError without a secret phrase."""
        if not self.secret_phrase:
            raise ValueError("TransactionRequest.SecretPhrase is not set")
        request_type = (
            self.request_type.value
            if isinstance(self.request_type, RequestType)
            else str(self.request_type)
        )
        params = {
            "requestType": request_type,
            "secretPhrase": self.secret_phrase,
            "feeNQT": str(self.fee_nqt),
            "deadline": str(self.deadline or DEFAULT_DEADLINE),
        }
        if self.message:
            params["message"] = self.message
            params["messageIsText"] = _flag(self.message_is_text)
        if self.message_to_encrypt:
            params["messageToEncrypt"] = self.message_to_encrypt
            params["messageToEncryptIsText"] = _flag(self.message_to_encrypt_is_text)
        if self.amount_nqt:
            params["amountNQT"] = str(self.amount_nqt)
        if self.min_activation_amount_nqt:
            params["minActivationAmountNQT"] = str(self.min_activation_amount_nqt)
        optional_text = {
            "recipient": self.recipient,
            "recipients": self.recipients,
            "name": self.name,
            "description": self.description,
            "code": self.code,
            "data": self.data,
            "dpages": self.dpages,
            "cspages": self.cspages,
            "uspages": self.uspages,
            "referencedTransactionFullHash": self.referenced_transaction_full_hash,
        }
        params.update({key: value for key, value in optional_text.items() if value})
        return params


@dataclass
class TransactionResponse:
    signature_hash: str = ""
    unsigned_transaction_bytes: str = ""
    transaction_json: Transaction = field(default_factory=Transaction)
    broadcasted: bool = False
    request_processing_time: int = 0
    transaction_bytes: str = ""
    full_hash: str = ""
    transaction: str = ""
    error: str = ""
    error_description: str = ""

    @classmethod
    def from_json(cls, data: Any) -> "TransactionResponse":
        data = _mapping(data)
        return cls(
            signature_hash=_text(data, "signatureHash"),
            unsigned_transaction_bytes=_text(data, "unsignedTransactionBytes"),
            transaction_json=Transaction.from_json(data.get("transactionJSON")),
            broadcasted=_bool(data, "broadcasted"),
            request_processing_time=_int(data, "requestProcessingTime"),
            transaction_bytes=_text(data, "transactionBytes"),
            full_hash=_text(data, "fullHash"),
            transaction=_text(data, "transaction"),
            error=_text(data, "error"),
            error_description=_text(data, "errorDescription"),
        )