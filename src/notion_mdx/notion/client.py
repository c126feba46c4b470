# ABOUTME: Wrapper around the official Notion Python SDK.
# ABOUTME: Exposes the collection, page and block lookups the exporter needs.

import functools
import logging
import time

from notion_client import Client
from notion_client.errors import APIResponseError
from notion_client.helpers import collect_paginated_api

from ..throttle import Throttle

logger = logging.getLogger(__name__)


def retry_on_rate_limit(max_retries: int = 3):
    """Decorator to retry on 429 responses using Retry-After header.

    Args:
        max_retries: Maximum number of attempts.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            for attempt in range(max_retries):
                try:
                    return func(*args, **kwargs)
                except APIResponseError as e:
                    if e.status == 429 and attempt < max_retries - 1:
                        retry_after = 1
                        headers = getattr(e, "headers", None)
                        if headers:
                            retry_after = int(headers.get("Retry-After", 1))
                        logger.warning(
                            f"Rate limited, retrying in {retry_after}s "
                            f"(attempt {attempt + 1}/{max_retries})"
                        )
                        time.sleep(retry_after)
                        continue
                    raise
            return None  # Unreachable but satisfies type checker
        return wrapper
    return decorator


class NotionClient:
    """Wrapper around the Notion SDK client.

    Every request waits on the optional throttle and is retried when the API
    answers 429.
    """

    def __init__(self, token: str, throttle: Throttle | None = None):
        """Initialize the client.

        Args:
            token: Notion integration token.
            throttle: Optional Throttle to space out requests.
        """
        self._client = Client(auth=token)
        self._throttle = throttle

    def _wait(self) -> None:
        if self._throttle is not None:
            self._throttle.wait()

    @retry_on_rate_limit()
    def get_database(self, database_id: str) -> dict:
        """Retrieve a database container, including its data source list."""
        self._wait()
        return self._client.databases.retrieve(database_id=database_id)

    @retry_on_rate_limit()
    def query_data_source(self, data_source_id: str) -> list[dict]:
        """Query all rows of a data source."""
        self._wait()
        return collect_paginated_api(
            self._client.data_sources.query,
            data_source_id=data_source_id,
        )

    def query_collection(self, collection_id: str) -> list[dict]:
        """Query all rows of a database, in the order the API returns them.

        A database holds one or more data sources; their rows are concatenated
        in the order the database lists them.

        Args:
            collection_id: The database ID.

        Returns:
            Every row of every data source of the database.
        """
        database = self.get_database(collection_id)

        rows = []
        for data_source in database.get("data_sources", []):
            rows.extend(self.query_data_source(data_source["id"]))

        logger.debug(f"Database {collection_id} has {len(rows)} rows")
        return rows

    @retry_on_rate_limit()
    def get_page(self, page_id: str) -> dict:
        """Retrieve a page by ID."""
        self._wait()
        return self._client.pages.retrieve(page_id=page_id)

    @retry_on_rate_limit()
    def get_blocks(self, block_id: str) -> list[dict]:
        """Retrieve all child blocks of a block/page."""
        self._wait()
        return collect_paginated_api(
            self._client.blocks.children.list,
            block_id=block_id,
        )
