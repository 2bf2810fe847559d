"""Unit tests for the statistics queries of PostgresPostRepository."""

from types import SimpleNamespace

import pytest

from blog.persistence.repository import PostgresPostRepository


class RecordingSession:
    """Stands in for AsyncSession, returning fixed (key, total) rows."""

    def __init__(self, key: str, rows: list[tuple[int, int]]):
        self.key = key
        self.rows = rows
        self.statements = []

    async def execute(self, stmt):
        self.statements.append(stmt)
        rows = [SimpleNamespace(**{self.key: k, "total": t}) for k, t in self.rows]
        return SimpleNamespace(fetchall=lambda: rows)


@pytest.mark.asyncio
async def test_monthly_counts_for_last_representable_year():
    session = RecordingSession("month", [(3, 2)])
    repo = PostgresPostRepository(session)

    counts = await repo.count_published_by_month(9999)

    assert counts[3] == 2
    assert sum(counts.values()) == 2
    assert len(session.statements) == 1


@pytest.mark.asyncio
async def test_yearly_counts_fill_missing_years():
    session = RecordingSession("year", [(9999, 1)])
    repo = PostgresPostRepository(session)

    counts = await repo.count_published_by_year([9998, 9999])

    assert counts == {9998: 0, 9999: 1}
