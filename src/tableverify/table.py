from __future__ import annotations

import logging
from typing import Iterable, Sequence

from .driver import Driver, Element
from .errors import ElementNotFoundError
from .locator_catalog import HTML_LAYOUT, TABLE_LAYOUTS, TABLE_ROOTS, TableLayout
from .locators import LocatorResolver, any_element
from .models import ColumnIndex, PageSnapshot, RowSnapshot
from .strategies import Strategy


class TableReader:
    """Reads the rendered rows of one table. Nothing is cached between calls."""

    def __init__(
        self,
        driver: Driver,
        resolver: LocatorResolver,
        roots: Sequence[Strategy] = TABLE_ROOTS,
        layouts: Sequence[TableLayout] = TABLE_LAYOUTS,
    ) -> None:
        self.driver = driver
        self.resolver = resolver
        self.roots = tuple(roots)
        self.layouts = tuple(layouts)
        self.logger = logging.getLogger("tableverify.table")

    def root(self) -> Element | None:
        return self.resolver.resolve(None, self.roots)

    def require_root(self) -> Element:
        root = self.root()
        if root is None:
            names = ", ".join(strategy.name for strategy in self.roots)
            raise ElementNotFoundError(f"Table not found (tried: {names})")
        return root

    def layout(self, root: Element) -> TableLayout:
        for layout in self.layouts:
            if self.resolver.resolve_all(root, layout.rows) or self.resolver.resolve_all(root, layout.headers):
                return layout
        return self.layouts[0] if self.layouts else HTML_LAYOUT

    def headers(self) -> ColumnIndex:
        root = self.require_root()
        layout = self.layout(root)
        elements = self.resolver.resolve_all(root, layout.headers, accept=any_element)
        return ColumnIndex(tuple(self.driver.text(element).strip() for element in elements))

    def row_elements(self) -> list[Element]:
        root = self.root()
        if root is None:
            return []
        layout = self.layout(root)
        rows = self.resolver.resolve_all(root, layout.rows)
        return [row for row in rows if self._cells(row, layout)]

    def cells(self, row: Element) -> list[Element]:
        root = self.root()
        layout = self.layout(root) if root is not None else HTML_LAYOUT
        return self._cells(row, layout)

    def cell_texts(self, row: Element) -> tuple[str, ...]:
        return tuple(self.driver.text(cell).strip() for cell in self.cells(row))

    def snapshot(self) -> PageSnapshot:
        columns = self.headers()
        rows = tuple(RowSnapshot(self.cell_texts(row)) for row in self.row_elements())
        return PageSnapshot(columns=columns, rows=rows)

    def first_cell(self) -> Element | None:
        rows = self.row_elements()
        if not rows:
            return None
        cells = self.cells(rows[0])
        return cells[0] if cells else None

    def fingerprint(self) -> str:
        cell = self.first_cell()
        if cell is None:
            return ""
        return self.driver.text(cell).strip()

    def find_row(self, column: str, value: str, *, case_sensitive: bool = True) -> tuple[int, Element] | None:
        """Return the zero-based index and element of the first row whose cell equals ``value``."""
        position = self.headers().position(column, case_sensitive=case_sensitive)
        for index, row in enumerate(self.row_elements()):
            texts = self.cell_texts(row)
            if position < len(texts) and texts[position] == value:
                return index, row
        return None

    def first_column_values(self) -> list[str]:
        values: list[str] = []
        for row in self.row_elements():
            texts = self.cell_texts(row)
            if texts and texts[0]:
                values.append(texts[0])
        return values

    def _cells(self, row: Element, layout: TableLayout) -> list[Element]:
        return self.resolver.resolve_all(row, layout.cells, accept=any_element)


def check_values_precede_column(values: Iterable[str], headers: ColumnIndex, final_column: str) -> list[str]:
    """Return one problem per value that is not a header placed before ``final_column``."""
    final_position = headers.position(final_column)
    problems: list[str] = []
    for value in values:
        label = value.strip()
        if not label:
            continue
        if label not in headers:
            problems.append(f"'{label}' is not present in the table headers")
            continue
        position = headers.position(label)
        if position >= final_position:
            problems.append(
                f"'{label}' appears at position {position + 1}, not before '{final_column}' "
                f"(position {final_position + 1})"
            )
    return problems
