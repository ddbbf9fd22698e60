"""Combine quarterly sales tables with rowframe.

This example walks through the main operations:
1. Building indices, columns and tables
2. Stacking tables that cover different stores
3. Joining tables side by side on their row labels
4. Totals, renaming and rendering
5. Moving the result to pandas
"""

from rowframe import (
    Column,
    Index,
    Table,
    get_logger,
    render_table,
    table_to_frame,
)

logger = get_logger(__name__)


def make_table(stores, **columns):
    rows = Index("store", stores)
    return Table(rows, [Column(name, rows, values) for name, values in columns.items()])


def main():
    """Run the walkthrough."""
    north = make_table(["Oslo", "Bergen"], q1=[120, 95], q2=[130, 90])
    south = make_table(["Rome", "Milan", "Turin"], q1=[210, 180, 75], q3=[220, 160, 80])

    # Stacking puts the southern stores below the northern ones; quarters
    # missing on one side are left empty.
    sales = north.stack(south)
    logger.info("Stacked %d stores over %d quarters", sales.row_count, sales.column_count)
    print(render_table(sales))
    print()

    # Juxtaposing matches rows by label: only Rome and Oslo have staff data
    # and Paris only appears in the staff table.
    staff = make_table(["Rome", "Oslo", "Paris"], staff=[12, 7, 9])
    combined = sales.juxtapose(staff)
    print(render_table(combined))
    print()

    print(f"Milan Q3: {combined.cell_value('Milan', 'q3')}")
    print(f"Paris Q1: {combined.cell_value('Paris', 'q1')}")
    print()

    totals = sales.aggregate_sum().with_headers(Index.from_strings("Q1", "Q2", "Q3"))
    print(render_table(totals))
    print()

    # Numeric indices are never materialized, even when very large.
    big = Index.numeric("", 0, 10**12)
    print(f"Last labels of a fused trillion-label index: {big.fuse_and_last(Index('', [-1, 5]), 3)}")
    print()

    frame = table_to_frame(combined)
    print(frame)


if __name__ == "__main__":
    main()
