import attrs


@attrs.define(frozen=True)
class EventTicketCounts:
    total_tickets: int
    valid_tickets: int  # purchased + checked_in
    checked_in_count: int


@attrs.define(frozen=True)
class EventCheckInStats:
    event_id: int
    event_name: str
    total_tickets: int
    valid_tickets: int
    checked_in_count: int
    remaining: int
    check_in_percentage: int

    @classmethod
    def from_counts(
        cls, *, event_id: int, event_name: str, counts: EventTicketCounts
    ) -> 'EventCheckInStats':
        percentage = (
            round(counts.checked_in_count / counts.valid_tickets * 100)
            if counts.valid_tickets
            else 0
        )
        return cls(
            event_id=event_id,
            event_name=event_name,
            total_tickets=counts.total_tickets,
            valid_tickets=counts.valid_tickets,
            checked_in_count=counts.checked_in_count,
            remaining=counts.valid_tickets - counts.checked_in_count,
            check_in_percentage=percentage,
        )
