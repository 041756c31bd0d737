import pytest

from services.advocate_directory.controllers.advocate_service import (
    build_order_by,
    build_search_filter,
    escape_like,
    list_advocates,
    parse_list_params,
    parse_positive_int,
    parse_sort_field,
)
from services.advocate_directory.schemas.advocates import AdvocateListParams, SortField, SortOrder
from shared.config import Settings


class TestParseListParams:
    def test_defaults(self):
        params = parse_list_params(Settings())

        assert params == AdvocateListParams(
            search=None, sort_by=SortField.FIRST_NAME, sort_order=SortOrder.ASC, page=1, limit=10
        )
        assert params.offset == 0

    def test_explicit_values(self):
        params = parse_list_params(
            Settings(), search=" anxiety ", sort_by="city", sort_order="desc", page="3", limit="20"
        )

        assert params.search == " anxiety "
        assert params.sort_by == SortField.CITY
        assert params.sort_order == SortOrder.DESC
        assert params.offset == 40

    def test_empty_search_counts_as_absent(self):
        assert parse_list_params(Settings(), search="").search is None

    def test_limit_uses_configured_default_and_cap(self):
        settings = Settings(default_page_size=25, max_page_size=50)

        assert parse_list_params(settings).limit == 25
        assert parse_list_params(settings, limit="500").limit == 50

    @pytest.mark.parametrize("raw", ["DESC", "descending", "", None, "asc"])
    def test_anything_but_desc_is_ascending(self, raw):
        assert parse_list_params(Settings(), sort_order=raw).sort_order == SortOrder.ASC


@pytest.mark.parametrize(
    "raw,expected",
    [(None, 7), ("5", 5), (" 12 ", 12), ("0", 7), ("-1", 7), ("1.5", 7), ("x", 7)],
)
def test_parse_positive_int(raw, expected):
    assert parse_positive_int(raw, 7) == expected


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("lastName", SortField.LAST_NAME),
        ("phoneNumber", SortField.PHONE_NUMBER),
        ("id", SortField.ID),
        ("specialties", SortField.FIRST_NAME),
        ("last_name", SortField.FIRST_NAME),
        (None, SortField.FIRST_NAME),
    ],
)
def test_parse_sort_field(raw, expected):
    assert parse_sort_field(raw) == expected


def test_escape_like():
    assert escape_like("50%_off\\") == "50\\%\\_off\\\\"
    assert escape_like("plain") == "plain"


class TestBuildSearchFilter:
    @pytest.mark.parametrize("search", [None, "", "a"])
    def test_below_threshold_has_no_filter(self, search):
        assert build_search_filter(search, 2) is None

    def test_threshold_boundary(self):
        assert build_search_filter("ab", 3) is None
        assert build_search_filter("abc", 3) is not None

    def test_filter_covers_every_searchable_column(self):
        clause = build_search_filter("anx", 2)
        sql = str(clause.compile(compile_kwargs={"literal_binds": True})).lower()

        for column in ("first_name", "last_name", "city", "degree", "phone_number", "payload"):
            assert column in sql
        assert sql.count("%anx%") == 6


class TestBuildOrderBy:
    def test_secondary_key_is_id(self):
        order = build_order_by(SortField.CITY, SortOrder.DESC)
        rendered = [str(clause) for clause in order]

        assert rendered == ["advocates.city DESC", "advocates.id ASC"]

    def test_id_sort_has_no_secondary_key(self):
        order = build_order_by(SortField.ID, SortOrder.ASC)

        assert [str(clause) for clause in order] == ["advocates.id ASC"]

    def test_unsortable_field_uses_first_name(self):
        order = build_order_by(SortField.SPECIALTIES, SortOrder.ASC)

        assert str(order[0]) == "advocates.first_name ASC"


@pytest.mark.asyncio
async def test_list_advocates_against_session(db_session):
    params = AdvocateListParams(search="msw", sort_by=SortField.YEARS_OF_EXPERIENCE, page=1, limit=2)

    result = await list_advocates(db_session, params, search_min_length=2)

    assert result.pagination.total == 5
    assert result.pagination.total_pages == 3
    assert [a.years_of_experience for a in result.data] == [3, 4]
    assert all(a.degree == "MSW" for a in result.data)


@pytest.mark.asyncio
async def test_list_advocates_past_the_last_page(db_session):
    params = AdvocateListParams(page=10**19, limit=10)

    result = await list_advocates(db_session, params, search_min_length=2)

    assert result.data == []
    assert result.pagination.total == 15
    assert result.pagination.total_pages == 2
