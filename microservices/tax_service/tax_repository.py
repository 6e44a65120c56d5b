"""
Tax Repository

Data access layer for the tax ledger using the shared PostgreSQL client.
Matches schema: tax.ledger_entries
"""

import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, List, Dict, Any

from core.config import InfraConfig
from core.postgres_client import PostgresClientWrapper

from .protocols import TaxLedgerError

logger = logging.getLogger(__name__)


class TaxRepository:
    """
    Repository for tax ledger operations.

    Tables:
        - tax.ledger_entries: One row per jurisdiction per invoice, either
          tax collected from the customer or tax owed to the authority
    """

    ENTRY_COLUMNS = [
        "entry_id",
        "company_id",
        "invoice_id",
        "jurisdiction",
        "jurisdiction_type",
        "entry_type",
        "rate",
        "amount",
        "provider",
        "recorded_at",
    ]

    def __init__(self, db=None, config: Optional[InfraConfig] = None):
        """Initialize Tax Repository with PostgresClient"""
        self.db = db or PostgresClientWrapper("tax_service", config=config)

        self.schema = "tax"
        self.entries_table = "ledger_entries"

        logger.info("TaxRepository initialized with PostgresClient")

    @property
    def table(self) -> str:
        return f'"{self.schema}".{self.entries_table}'

    async def initialize(self) -> None:
        """Create the ledger schema and table if missing"""
        try:
            async with self.db:
                await self.db.execute(f'CREATE SCHEMA IF NOT EXISTS "{self.schema}"')
                await self.db.execute(f'''
                    CREATE TABLE IF NOT EXISTS {self.table} (
                        entry_id VARCHAR(64) PRIMARY KEY,
                        company_id VARCHAR(64) NOT NULL,
                        invoice_id VARCHAR(64) NOT NULL,
                        jurisdiction VARCHAR(255) NOT NULL,
                        jurisdiction_type VARCHAR(16) NOT NULL,
                        entry_type VARCHAR(16) NOT NULL,
                        rate NUMERIC(10, 6) NOT NULL DEFAULT 0,
                        amount NUMERIC(18, 6) NOT NULL,
                        provider VARCHAR(32),
                        recorded_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
                    )
                ''')
                await self.db.execute(
                    f'CREATE INDEX IF NOT EXISTS idx_ledger_company_recorded '
                    f'ON {self.table} (company_id, recorded_at)'
                )
            logger.info("Tax ledger schema ready")
        except Exception as e:
            logger.error(f"Failed to initialize tax ledger schema: {e}")
            raise TaxLedgerError(f"Failed to initialize tax ledger: {e}") from e

    async def create_entries(self, entries: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Insert ledger entries in a single transaction"""
        if not entries:
            return []

        placeholders = ", ".join(f"${i + 1}" for i in range(len(self.ENTRY_COLUMNS)))
        query = (
            f"INSERT INTO {self.table} ({', '.join(self.ENTRY_COLUMNS)}) "
            f"VALUES ({placeholders})"
        )
        rows = [[entry.get(column) for column in self.ENTRY_COLUMNS] for entry in entries]

        try:
            async with self.db:
                await self.db.execute_many(query, rows)

            return [dict(entry) for entry in entries]

        except Exception as e:
            logger.error(f"Failed to create tax ledger entries: {e}")
            raise TaxLedgerError(f"Failed to write tax ledger: {e}") from e

    async def get_jurisdiction_totals(
        self, company_id: str, start_date: date, end_date: date
    ) -> List[Dict[str, Any]]:
        """Collected and liability totals per jurisdiction and type, both dates inclusive"""
        range_start = datetime.combine(start_date, time.min, tzinfo=timezone.utc)
        range_end = datetime.combine(end_date + timedelta(days=1), time.min, tzinfo=timezone.utc)

        query = f'''
            SELECT jurisdiction, jurisdiction_type,
                   COALESCE(SUM(amount) FILTER (WHERE entry_type = 'collected'), 0) AS collected,
                   COALESCE(SUM(amount) FILTER (WHERE entry_type = 'liability'), 0) AS liability
            FROM {self.table}
            WHERE company_id = $1 AND recorded_at >= $2 AND recorded_at < $3
            GROUP BY jurisdiction, jurisdiction_type
            ORDER BY jurisdiction, jurisdiction_type
        '''

        try:
            async with self.db:
                results = await self.db.query(query, [company_id, range_start, range_end])

            return [
                {
                    "jurisdiction": row["jurisdiction"],
                    "jurisdiction_type": row.get("jurisdiction_type") or "special",
                    "collected": float(row.get("collected") or 0),
                    "liability": float(row.get("liability") or 0),
                }
                for row in (results or [])
            ]

        except Exception as e:
            logger.error(f"Failed to get jurisdiction totals for company {company_id}: {e}")
            raise TaxLedgerError(f"Failed to read tax ledger: {e}") from e

    async def list_entries(
        self,
        company_id: str,
        invoice_id: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[Dict[str, Any]]:
        """List ledger entries with filtering"""
        conditions = ["company_id = $1"]
        params: List[Any] = [company_id]

        if invoice_id:
            params.append(invoice_id)
            conditions.append(f"invoice_id = ${len(params)}")

        query = f'''
            SELECT * FROM {self.table}
            WHERE {" AND ".join(conditions)}
            ORDER BY recorded_at DESC
            LIMIT {int(limit)} OFFSET {int(offset)}
        '''

        try:
            async with self.db:
                results = await self.db.query(query, params)

            return [self._normalize_entry(r) for r in (results or [])]

        except Exception as e:
            logger.error(f"Failed to list tax ledger entries: {e}")
            raise TaxLedgerError(f"Failed to read tax ledger: {e}") from e

    async def health_check(self) -> bool:
        """Whether the ledger database answers a query"""
        return await self.db.health_check()

    async def close(self) -> None:
        await self.db.close()

    def _normalize_entry(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Normalize ledger entry data from database"""
        return {
            "entry_id": data["entry_id"],
            "company_id": data["company_id"],
            "invoice_id": data["invoice_id"],
            "jurisdiction": data["jurisdiction"],
            "jurisdiction_type": data.get("jurisdiction_type", "special"),
            "entry_type": data["entry_type"],
            "rate": float(data.get("rate") or 0),
            "amount": float(data.get("amount") or 0),
            "provider": data.get("provider"),
            "recorded_at": data.get("recorded_at"),
        }
