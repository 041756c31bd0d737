# services/advocate_directory/client/render.py

from rich.table import Table
from rich.text import Text

from services.advocate_directory.client.listing import ListingState
from services.advocate_directory.schemas.advocates import SortField, SortOrder

COLUMNS = [
    (SortField.FIRST_NAME, "First Name"),
    (SortField.LAST_NAME, "Last Name"),
    (SortField.CITY, "City"),
    (SortField.DEGREE, "Degree"),
    (SortField.SPECIALTIES, "Specialties"),
    (SortField.YEARS_OF_EXPERIENCE, "Years of Experience"),
    (SortField.PHONE_NUMBER, "Phone Number"),
]

EMPTY_MESSAGE = "No advocates found matching your search criteria."


def sort_indicator(state: ListingState, sort_field: SortField) -> str:
    if state.sort_by != sort_field:
        return "↕"
    return "↑" if state.sort_order == SortOrder.ASC else "↓"


def format_cell(row: dict, sort_field: SortField) -> str:
    value = row.get(sort_field.value)
    if sort_field == SortField.SPECIALTIES:
        return ", ".join(value or [])
    if sort_field == SortField.YEARS_OF_EXPERIENCE:
        return f"{value} years"
    return "" if value is None else str(value)


def render_table(state: ListingState) -> Table:
    table = Table(title="Advocates", header_style="bold white on blue")
    for sort_field, label in COLUMNS:
        table.add_column(f"{label} {sort_indicator(state, sort_field)}")

    for row in state.rows:
        table.add_row(*(format_cell(row, sort_field) for sort_field, _ in COLUMNS))

    if not state.rows:
        table.caption = EMPTY_MESSAGE
    else:
        table.caption = f"Page {state.page} of {state.total_pages} ({state.total} advocates)"
    if state.search:
        table.caption += f" | Searching for: {state.search}"
    return table


def render_error(state: ListingState) -> Text:
    return Text(f"Error: {state.error}", style="bold red")
