"""Registration fee rules.

Pure functions: no I/O, deterministic for a given configuration.
"""

from eventhub.domain.enums import FeeStructure, FeeType
from eventhub.domain.errors import ValidationError
from eventhub.domain.models import FeeConfig
from eventhub.domain.value_objects import Money

REQUIRED_FEE_FIELDS: dict[FeeStructure, tuple[str, ...]] = {
    FeeStructure.PER_PERSON: ("fee_per_person",),
    FeeStructure.PER_TEAM_FLAT: ("team_flat_fee",),
    FeeStructure.PER_PERSON_WITH_CAP: ("fee_per_person", "team_fee_cap"),
}


def calculate_fee(config: FeeConfig, party_size: int) -> Money:
    """Return the payable amount for a party of ``party_size`` people.

    Raises:
        ValidationError: If party_size is not positive or a paid event has no structure.
    """
    if party_size <= 0:
        raise ValidationError("Party size must be at least 1", fields=("party_size",))

    if config.fee_type is FeeType.FREE:
        return Money.zero()

    structure = config.fee_structure
    if structure is FeeStructure.PER_PERSON:
        return config.fee_per_person * party_size
    if structure is FeeStructure.PER_TEAM_FLAT:
        return config.team_flat_fee
    if structure is FeeStructure.PER_PERSON_WITH_CAP:
        uncapped = config.fee_per_person * party_size
        if config.team_fee_cap.is_zero:
            return uncapped
        return min(uncapped, config.team_fee_cap)

    raise ValidationError("Paid events need a fee structure", fields=("fee_structure",))


def missing_fee_fields(config: FeeConfig) -> list[str]:
    """Names of amounts the selected structure needs but that are zero."""
    if config.fee_type is FeeType.FREE:
        return []
    if config.fee_structure is None:
        return ["fee_structure"]
    return [
        name
        for name in REQUIRED_FEE_FIELDS[config.fee_structure]
        if getattr(config, name).is_zero
    ]


def validate_fee_config(config: FeeConfig) -> None:
    """Reject paid configurations that would silently compute zero revenue."""
    missing = missing_fee_fields(config)
    if missing:
        raise ValidationError(
            f"Fee configuration incomplete: {', '.join(missing)}",
            fields=missing,
        )


def fee_breakdown(config: FeeConfig, party_size: int) -> dict[str, str]:
    """Snapshot of how a registration total was derived."""
    total = calculate_fee(config, party_size)
    return {
        "fee_type": config.fee_type.value,
        "structure": config.fee_structure.value if config.fee_structure else "",
        "party_size": str(party_size),
        "unit_fee": str(config.fee_per_person),
        "flat_fee": str(config.team_flat_fee),
        "cap": str(config.team_fee_cap),
        "total": str(total),
    }
