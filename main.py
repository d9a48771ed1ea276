"""Example usage of Qiniu Statistics SDK."""

import logging
from datetime import date

from qiniu_stats_sdk import (
    BlobIORequest,
    Credentials,
    Granularity,
    QiniuAPIError,
    SpaceRequest,
    StatisticsClient,
)


def main() -> None:
    """Example: Fetch storage usage and outbound traffic for a bucket."""
    logging.basicConfig(level=logging.DEBUG)
    credentials = Credentials("your-access-key", "your-secret-key")

    with StatisticsClient(credentials=credentials, check_status=True) as client:
        try:
            space = client.get_space(
                SpaceRequest(
                    bucket="your-bucket",
                    begin=date(2024, 1, 1),
                    end=date(2024, 1, 31),
                    granularity=Granularity.DAY,
                )
            )
            for timestamp, size in space.points():
                print(f"{timestamp}: {size} bytes")

            # Streaming mode - memory efficient for 5min granularity
            request = BlobIORequest(
                bucket="your-bucket",
                begin=date(2024, 1, 1),
                end=date(2024, 1, 31),
                granularity=Granularity.FIVE_MINUTES,
                select="flow",
            )
            total = sum(record.flow for record in client.stream_blob_io(request))
            print(f"Outbound traffic: {total} bytes")

        except QiniuAPIError as e:
            print(f"API error: {e}")


if __name__ == "__main__":
    main()
