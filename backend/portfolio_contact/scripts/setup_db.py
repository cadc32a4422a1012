import asyncio
import sys

import psycopg

from portfolio_contact.core.db import close_pool, open_pool
from portfolio_contact.core.migrations import ensure_contact_schema
from portfolio_contact.core.settings import settings
from portfolio_contact.lib.submissions import SubmissionStore


async def setup() -> int:
    print("Setting up database tables...")
    pool = await open_pool()
    try:
        await pool.wait()
        if not await ensure_contact_schema(pool):
            print("No schema file found; nothing was created.")
            return 1
        exists = await SubmissionStore(pool).table_exists()
    except psycopg.Error as exc:
        print(f"Database setup failed: {exc}")
        return 1
    finally:
        await close_pool()

    if not exists:
        print("Schema ran but contact_submissions is still missing.")
        return 1

    print("Database setup completed.")
    print(f"Table contact_submissions is ready on {settings.database_url.rsplit('@', 1)[-1]}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(setup()))
