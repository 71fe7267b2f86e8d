"""Infrastructure adapters for the petition ledger."""

from petition_ledger.infrastructure.adapters.petition_id_generator import (
    SequentialPetitionIdGenerator,
    UuidPetitionIdGenerator,
)

__all__: list[str] = ["SequentialPetitionIdGenerator", "UuidPetitionIdGenerator"]
