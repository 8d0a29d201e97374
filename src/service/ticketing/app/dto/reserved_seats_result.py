import attrs


@attrs.define(frozen=True)
class ReservedSeatsResult:
    event_id: int
    seats: list[str]

    @property
    def count(self) -> int:
        return len(self.seats)
