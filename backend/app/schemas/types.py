from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, PlainSerializer

from app.timestamps import as_utc, to_naive_utc

# Client clocks send offsets; the store compares naive UTC.
UtcDatetime = Annotated[datetime, AfterValidator(to_naive_utc)]

# Stored naive UTC goes out with an explicit offset ("Z").
UtcTimestamp = Annotated[datetime, PlainSerializer(as_utc, return_type=datetime, when_used="json")]
