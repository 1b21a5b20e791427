"""Repository for paragliding site catalog access."""
import logging
from pathlib import Path
from typing import Dict, List, Optional

import attrs
import numpy as np
import pandas as pd

from backend.config import settings
from flyability.errors import SiteCatalogError
from flyability.models.site import (
    Coordinates,
    DataSource,
    LaunchDirectionRange,
    ParaglidingSite,
    SiteCharacteristics,
    SiteType,
)

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["id", "name", "latitude", "longitude"]
CHARACTERISTIC_FIELDS = [f.name for f in attrs.fields(SiteCharacteristics)]


def _value(row: pd.Series, key: str):
    """Row value with missing columns and NaN mapped to None."""
    value = row.get(key)
    if value is None:
        return None
    if isinstance(value, (float, np.floating)) and np.isnan(value):
        return None
    return value


def _parse_site_type(value) -> SiteType:
    if value is None:
        return SiteType.HANG
    try:
        return SiteType(str(value).strip().lower())
    except ValueError:
        return SiteType.UNKNOWN


def _parse_launch_ranges(row: pd.Series) -> List[LaunchDirectionRange]:
    """Explicit [start, stop] pairs win over compass text."""
    ranges = _value(row, "launch_ranges")
    if ranges is not None and len(ranges) > 0:
        return [LaunchDirectionRange(start, stop) for start, stop in ranges]

    text = _value(row, "direction_text")
    if text:
        return LaunchDirectionRange.from_text(str(text))
    return []


def row_to_site(row: pd.Series) -> ParaglidingSite:
    """
    Convert one catalog row to a site.

    Raises:
        ValueError, TypeError: if the row holds unusable values
    """
    elevation = _value(row, "elevation")
    country = _value(row, "country")
    data_source = _value(row, "data_source")

    return ParaglidingSite(
        id=str(row["id"]),
        name=str(row["name"]),
        coordinates=Coordinates(row["latitude"], row["longitude"]),
        elevation=float(elevation) if elevation is not None else None,
        launch_direction_ranges=_parse_launch_ranges(row),
        site_type=_parse_site_type(_value(row, "site_type")),
        country=str(country) if country is not None else None,
        data_source=DataSource(data_source) if data_source is not None else DataSource.CUSTOM,
        characteristics=SiteCharacteristics(
            **{name: _value(row, name) for name in CHARACTERISTIC_FIELDS}
        ),
    )


class SiteRepository:
    """File-backed site catalog (JSON records, CSV or pickled DataFrame)."""

    def __init__(self, sites_file: Path = None, include_winch_sites: bool = None):
        """Initialize repository with path to sites file."""
        self.sites_file = Path(sites_file or settings.sites_file)
        self.include_winch_sites = (
            settings.include_winch_sites if include_winch_sites is None else include_winch_sites
        )
        self._sites: List[ParaglidingSite] = []
        self._site_index: Dict[str, ParaglidingSite] = {}
        self._loaded = False

    def _read_frame(self) -> pd.DataFrame:
        suffix = self.sites_file.suffix.lower()
        try:
            if suffix == ".json":
                return pd.read_json(self.sites_file, orient="records", dtype=False, convert_dates=False)
            if suffix == ".csv":
                return pd.read_csv(self.sites_file, dtype={"id": str})
            if suffix == ".pkl":
                return pd.read_pickle(self.sites_file)
        except (OSError, ValueError) as e:
            raise SiteCatalogError(f"Cannot read site catalog {self.sites_file}: {e}") from e
        raise SiteCatalogError(f"Unsupported site catalog format: {self.sites_file}")

    def _load(self) -> None:
        """Load and parse the catalog once."""
        if self._loaded:
            return

        df = self._read_frame()
        missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise SiteCatalogError(f"Site catalog {self.sites_file} lacks columns: {missing}")

        sites = []
        for idx, row in df.iterrows():
            try:
                site = row_to_site(row)
            except (ValueError, TypeError) as e:
                logger.warning("Skipping catalog row %s (%s): %s", idx, row.get("name"), e)
                continue

            if site.site_type == SiteType.WINCH and not self.include_winch_sites:
                continue
            sites.append(site)

        self._sites = sites
        self._site_index = {site.id: site for site in sites}
        self._loaded = True
        logger.info("Loaded %d sites from %s (%d rows)", len(sites), self.sites_file, len(df))

    def preload(self) -> None:
        """Load the catalog eagerly, e.g. at application startup."""
        self._load()

    def sites_in_catalog(self) -> List[ParaglidingSite]:
        """Get all usable sites."""
        self._load()
        return list(self._sites)

    def get_site(self, site_id: str) -> Optional[ParaglidingSite]:
        """Get a single site by ID."""
        self._load()
        return self._site_index.get(site_id)
