"""
Core exception types for citadel_funding.

These are dependency-free and may be imported by all modules. Every guard
failure raised by a `Funding` entrypoint derives from `FundingError` and
carries a `reason` tag matching the revert string observed on chain.
"""

__all__ = [
    "AmountDomainError",
    "InvariantViolation",
    "FundingError",
    "AccessDenied",
    "SystemPaused",
    "LimitInvalid",
    "BelowMinimum",
    "AboveMaximum",
    "SlippageExceeded",
    "InsufficientOutputLiquidity",
    "PriceFlagged",
    "PriceNotSet",
    "InvalidPrice",
    "ZeroAmount",
    "AssetCapExceeded",
    "InsufficientBalance",
    "InsufficientAllowance",
]


class AmountDomainError(Exception):
    """Raised when inputs violate the non-negative domain or basic preconditions."""
    pass


class InvariantViolation(Exception):
    """Raised when arithmetic or guards would break core invariants."""
    pass


class FundingError(Exception):
    """Base class for every revert raised by a Funding entrypoint.

    Attributes
    ----------
    reason : str
        Machine/human-readable revert tag (e.g. "global-paused").
    """

    default_reason = "funding-error"

    def __init__(self, reason=None):
        self.reason = reason if reason is not None else self.default_reason
        super().__init__(self.reason)


class SystemPaused(FundingError):
    """Global kill-switch is active. Takes precedence over AccessDenied."""
    default_reason = "global-paused"


class AccessDenied(FundingError):
    """Caller lacks the capability required by the entrypoint.

    Attributes
    ----------
    role : str | None
        The capability that was required (None for deny-list rejections).
    principal : str
        The rejected caller.
    """

    default_reason = "GAC: invalid-caller-role"

    def __init__(self, principal, role=None, reason=None):
        super().__init__(reason)
        self.principal = principal
        self.role = role

    def __str__(self) -> str:
        if self.role is None:
            return f"{self.reason} (principal={self.principal})"
        return f"{self.reason} (principal={self.principal}, role={self.role})"


class LimitInvalid(FundingError):
    default_reason = "maxDiscount >= MAX_BPS"


class BelowMinimum(FundingError):
    default_reason = "discount < minDiscount"


class AboveMaximum(FundingError):
    default_reason = "discount > maxDiscount"


class SlippageExceeded(FundingError):
    """Quoted output is below the caller's floor."""

    default_reason = "minCitadelOut"

    def __init__(self, amount_out, min_amount_out):
        super().__init__()
        self.amount_out = amount_out
        self.min_amount_out = min_amount_out

    def __str__(self) -> str:
        return f"{self.reason}: quoted={self.amount_out} < min={self.min_amount_out}"


class InsufficientOutputLiquidity(FundingError):
    """Contract holds less output token than the deposit would deliver.

    Attributes
    ----------
    requested_out : int
        Output amount the quote promised.
    available_out : int
        Output-token balance held by the contract.
    """

    default_reason = "insufficient citadel liquidity"

    def __init__(self, requested_out, available_out):
        super().__init__()
        self.requested_out = requested_out
        self.available_out = available_out

    def __str__(self) -> str:
        return (
            f"Requested out={self.requested_out} exceeds available liquidity={self.available_out}"
        )


class PriceFlagged(FundingError):
    default_reason = "Funding: citadel price is flagged"


class PriceNotSet(FundingError):
    default_reason = "Funding: citadel price not set"


class InvalidPrice(FundingError):
    default_reason = "citadel price must not be zero"


class ZeroAmount(FundingError):
    default_reason = "_assetAmountIn must not be 0"


class AssetCapExceeded(FundingError):
    """Deposit (or new cap) conflicts with the asset funding cap."""

    default_reason = "asset funding cap exceeded"

    def __init__(self, requested, remaining, reason=None):
        super().__init__(reason)
        self.requested = requested
        self.remaining = remaining


class InsufficientBalance(FundingError):
    """Token transfer would overdraw the sender."""

    default_reason = "ERC20: transfer amount exceeds balance"

    def __init__(self, token, account, needed, available):
        super().__init__()
        self.token = token
        self.account = account
        self.needed = needed
        self.available = available

    def __str__(self) -> str:
        return f"{self.reason} ({self.token}: {self.account} has {self.available}, needs {self.needed})"


class InsufficientAllowance(FundingError):
    """Token transfer_from exceeds the owner's approval for the spender."""

    default_reason = "ERC20: insufficient allowance"

    def __init__(self, token, owner, spender, needed, available):
        super().__init__()
        self.token = token
        self.owner = owner
        self.spender = spender
        self.needed = needed
        self.available = available

    def __str__(self) -> str:
        return (
            f"{self.reason} ({self.token}: {self.owner}->{self.spender} "
            f"allowance {self.available}, needs {self.needed})"
        )
