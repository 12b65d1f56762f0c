import pytest

from ticket_ledger.service.ticketing.domain.value_object.pagination import (
    MAX_OFFSET,
    PageRequest,
    Pagination,
)


class TestPageRequestFromRaw:
    def test_defaults_when_missing(self) -> None:
        request = PageRequest.from_raw()

        assert (request.page, request.limit) == (1, 10)
        assert request.offset == 0

    @pytest.mark.parametrize('page,limit', [('invalid', 'invalid'), (0, 0), (-3, -1), (None, '')])
    def test_bad_values_fall_back_to_defaults(self, page, limit) -> None:
        request = PageRequest.from_raw(page, limit)

        assert (request.page, request.limit) == (1, 10)

    def test_numeric_strings_are_accepted(self) -> None:
        request = PageRequest.from_raw('3', '20')

        assert (request.page, request.limit) == (3, 20)
        assert request.offset == 40

    def test_limit_is_capped(self) -> None:
        assert PageRequest.from_raw(1, 1000).limit == 100

    def test_infinite_page_falls_back_to_default(self) -> None:
        assert PageRequest.from_raw(float('inf'), 10).page == 1

    def test_huge_page_keeps_offset_bindable(self) -> None:
        request = PageRequest.from_raw(10**20, 100)

        assert request.page == 10**20
        assert request.offset == MAX_OFFSET


class TestPaginationBuild:
    def test_has_more_on_earlier_pages(self) -> None:
        pagination = Pagination.build(request=PageRequest(page=1, limit=10), total=25)

        assert pagination.total_pages == 3
        assert pagination.has_more

    def test_last_page(self) -> None:
        pagination = Pagination.build(request=PageRequest(page=3, limit=10), total=25)

        assert not pagination.has_more

    def test_empty_result(self) -> None:
        pagination = Pagination.build(request=PageRequest(page=1, limit=10), total=0)

        assert pagination.total_pages == 0
        assert not pagination.has_more

    def test_page_past_the_end(self) -> None:
        pagination = Pagination.build(request=PageRequest(page=10**20, limit=10), total=25)

        assert pagination.page == 10**20
        assert not pagination.has_more
