"""
Canonical value tables for categorical sales fields.

The payment-method table is plain data: each alias (lowercase, trimmed)
maps to one canonical label. Lookups are case-insensitive and values with
no alias pass through trimmed.
"""

PAYMENT_METHOD_ALIASES: dict[str, tuple[str, ...]] = {
    "Credit Card": ("creditcard", "credit card", "cc", "credit"),
    "Debit Card": ("debit card", "debit"),
    "PayPal": ("paypal",),
    "Bank Transfer": ("bank transfer",),
}

CANONICAL_PAYMENT_METHODS = frozenset(PAYMENT_METHOD_ALIASES)


def build_alias_table(
    aliases: dict[str, tuple[str, ...]] | None = None,
    extra: dict[str, str] | None = None,
) -> dict[str, str]:
    """
    Flatten canonical -> aliases into alias -> canonical.

    Args:
        aliases: Canonical label to alias tuple (defaults to PAYMENT_METHOD_ALIASES)
        extra: Additional alias -> canonical entries, applied last

    Returns:
        Lookup keyed by lowercase, trimmed alias
    """
    table = {}
    for canonical, names in (aliases or PAYMENT_METHOD_ALIASES).items():
        for name in names:
            table[name.strip().lower()] = canonical

    for name, canonical in (extra or {}).items():
        table[name.strip().lower()] = canonical

    return table


class PaymentMethodMapper:
    """
    Normalizes payment method text against an alias table.

    "CC" -> "Credit Card", "Cash" -> "Cash", "" -> default label.
    """

    def __init__(self, alias_table: dict[str, str] | None = None, default: str = "Unknown"):
        self.alias_table = alias_table if alias_table is not None else build_alias_table()
        self.default = default

    def normalize(self, value: str | None) -> str:
        if value is None:
            return self.default

        text = value.strip()
        if not text:
            return self.default

        return self.alias_table.get(text.lower(), text)
