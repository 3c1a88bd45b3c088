# License: MIT
# Copyright © 2024 Frequenz Energy-as-a-Service GmbH

"""Script with an example how to read measures with a MeasureCursor."""

import logging
from collections.abc import Sequence
from datetime import datetime, timedelta, timezone

from frequenz.sos.timeseries import (
    MeasureCursor,
    ObservableObject,
    RetrievalAlignment,
    RetrievalSettings,
    RetrievalWindow,
    Row,
    SeriesKey,
    TrackedAttribute,
    filter_measures,
)

START = datetime(2024, 1, 1, tzinfo=timezone.utc)
STEP = timedelta(hours=1)


class DailyPatternHandle:
    """A row store handle serving one day of hourly demand for every object."""

    def read_rows(self, key: SeriesKey, window: RetrievalWindow) -> Sequence[Row]:
        """Read the rows of a series."""
        logging.info("Reading %s in %s", key, window)
        return [Row(START + STEP * hour, [10.0 + hour % 12]) for hour in range(24)]

    def close(self) -> None:
        """Release nothing."""
        logging.info("Closing the store")


class DailyPatternStore:
    """A row store with one day of data."""

    def open(self) -> DailyPatternHandle:
        """Open the store."""
        return DailyPatternHandle()


def main() -> None:
    """Read three days of demand from one day of data."""
    logging.basicConfig(
        level=logging.DEBUG, format="%(asctime)s %(name)s %(levelname)s:%(message)s"
    )

    settings = RetrievalSettings(
        STEP,
        START,
        START + timedelta(days=3),
        alignment=RetrievalAlignment.START_DATE_ALIGNED,
    )
    objects = [ObservableObject("junction", "J1"), ObservableObject("junction", "J2")]
    demand = TrackedAttribute("demand", "DEMAND", units="l/s")

    with MeasureCursor(DailyPatternStore(), objects, [demand], settings) as cursor:
        for measure_set in cursor:
            synthesized = sum(m.synthesized for m in measure_set)
            (average,) = filter_measures(measure_set.measures, "sos_average(obs)")
            print(
                f"{measure_set.owner.object_name}: {len(measure_set)} measures "
                f"({synthesized} replayed), average {average.value:.2f}"
            )


if __name__ == "__main__":
    main()
