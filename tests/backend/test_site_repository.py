"""Tests for the site repository."""
import json
import pandas as pd
import pytest

from backend.data.site_repository import SiteRepository
from flyability.errors import SiteCatalogError
from flyability.models.site import DataSource, LaunchDirectionRange, SiteType

CATALOG = [
    {
        "id": "1001",
        "name": "Hochfelln",
        "latitude": 47.76,
        "longitude": 12.56,
        "elevation": 1670,
        "country": "DE",
        "site_type": "hang",
        "data_source": "dhv",
        "direction_text": "N, NE",
        "site_url": "https://example.org/hochfelln",
    },
    {
        "id": "1002",
        "name": "Wallberg",
        "latitude": 47.66,
        "longitude": 11.79,
        "site_type": "hang",
        "launch_ranges": [[202.5, 247.5]],
    },
    {
        "id": "1003",
        "name": "Winch Field",
        "latitude": 48.1,
        "longitude": 11.5,
        "site_type": "winch",
        "direction_text": "W",
    },
    {
        "id": "1004",
        "name": "Broken Coordinates",
        "latitude": 123.0,
        "longitude": 11.0,
    },
]


@pytest.fixture
def catalog_file(tmp_path):
    path = tmp_path / "sites.json"
    path.write_text(json.dumps(CATALOG))
    return path


class TestSiteRepository:
    """Tests for SiteRepository."""

    def test_loads_sites(self, catalog_file):
        """Test that valid hang sites are loaded and winch sites dropped."""
        repo = SiteRepository(sites_file=catalog_file, include_winch_sites=False)

        sites = repo.sites_in_catalog()

        assert [s.id for s in sites] == ["1001", "1002"]

    def test_include_winch_sites(self, catalog_file):
        """Test that winch sites can be included."""
        repo = SiteRepository(sites_file=catalog_file, include_winch_sites=True)

        sites = repo.sites_in_catalog()

        assert [s.id for s in sites] == ["1001", "1002", "1003"]
        assert sites[2].site_type == SiteType.WINCH

    def test_invalid_rows_skipped_with_warning(self, catalog_file, caplog):
        """Test that rows with bad coordinates are skipped and logged."""
        repo = SiteRepository(sites_file=catalog_file, include_winch_sites=False)

        with caplog.at_level("WARNING"):
            sites = repo.sites_in_catalog()

        assert "1004" not in [s.id for s in sites]
        assert "Broken Coordinates" in caplog.text

    def test_direction_text_parsed(self, catalog_file):
        """Test that compass text becomes launch ranges."""
        site = SiteRepository(sites_file=catalog_file, include_winch_sites=False).get_site("1001")

        assert site.launch_direction_ranges == (
            LaunchDirectionRange(337.5, 22.5),
            LaunchDirectionRange(22.5, 67.5),
        )
        assert site.elevation == 1670.0
        assert site.country == "DE"
        assert site.data_source == DataSource.DHV
        assert site.characteristics.site_url == "https://example.org/hochfelln"

    def test_explicit_ranges(self, catalog_file):
        """Test that explicit [start, stop] pairs are used as given."""
        site = SiteRepository(sites_file=catalog_file, include_winch_sites=False).get_site("1002")

        assert site.launch_direction_ranges == (LaunchDirectionRange(202.5, 247.5),)
        assert site.elevation is None
        assert site.data_source == DataSource.CUSTOM

    def test_get_site_missing(self, catalog_file):
        """Test that unknown IDs return None."""
        assert SiteRepository(sites_file=catalog_file).get_site("nope") is None

    def test_pickled_dataframe(self, tmp_path):
        """Test loading a pickled DataFrame catalog."""
        path = tmp_path / "sites.pkl"
        pd.DataFrame(CATALOG[:2]).to_pickle(path)

        sites = SiteRepository(sites_file=path, include_winch_sites=False).sites_in_catalog()

        assert [s.id for s in sites] == ["1001", "1002"]

    def test_missing_file(self, tmp_path):
        """Test that an unreadable catalog raises SiteCatalogError."""
        repo = SiteRepository(sites_file=tmp_path / "missing.json")

        with pytest.raises(SiteCatalogError):
            repo.sites_in_catalog()

    def test_missing_columns(self, tmp_path):
        """Test that a catalog without coordinates is rejected."""
        path = tmp_path / "sites.json"
        path.write_text(json.dumps([{"id": "1", "name": "No coordinates"}]))

        with pytest.raises(SiteCatalogError):
            SiteRepository(sites_file=path).sites_in_catalog()

    def test_unsupported_format(self, tmp_path):
        """Test that unknown file types are rejected."""
        path = tmp_path / "sites.xml"
        path.write_text("<sites/>")

        with pytest.raises(SiteCatalogError):
            SiteRepository(sites_file=path).sites_in_catalog()
