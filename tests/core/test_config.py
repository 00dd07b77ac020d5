"""Tests for RunConfig."""

import pytest

from landtemp.config import RunConfig
from landtemp.core.exceptions import ValidationError
from landtemp.core.variant import Variant
from landtemp.products.profiles.landsat import LANDSAT5_TM
from landtemp.retrieval.emissivity import DEFAULT_MODEL, EmissivityModel


class TestRunConfig:
    def test_defaults(self):
        config = RunConfig(start_year=1985, end_year=2011)
        assert config.variant is Variant.DN_RADIANCE
        assert config.cloud_cover_threshold == 30.0
        assert config.profile is LANDSAT5_TM
        assert config.emissivity_model == DEFAULT_MODEL
        assert len(config.years) == 27

    def test_variant_string(self):
        assert RunConfig(1990, 1990, variant="trad").variant is Variant.TRAD_RADIANCE

    def test_single_year(self):
        assert list(RunConfig(1990, 1990).years) == [1990]

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"start_year": 1991, "end_year": 1990},
            {"start_year": 1990, "end_year": 1990, "cloud_cover_threshold": 101},
            {"start_year": 1990, "end_year": 1990, "cloud_cover_threshold": -1},
            {"start_year": 1990, "end_year": 1990, "cloud_cover_threshold": "cloudy"},
            {"start_year": 1990, "end_year": 1990, "retries": -1},
            {"start_year": 1990, "end_year": 1990, "max_workers": 0},
            {"start_year": 1990, "end_year": 1990, "variant": "mono-window"},
            {"start_year": 1990, "end_year": 1990, "sensor": "sentinel2"},
        ],
    )
    def test_invalid(self, kwargs):
        with pytest.raises(ValidationError):
            RunConfig(**kwargs)

    def test_no_cloud_cover_limit(self):
        config = RunConfig(1990, 1990, cloud_cover_threshold=None)
        assert config.cloud_cover_threshold is None
        restored = RunConfig.from_dict(config.to_dict())
        assert restored.cloud_cover_threshold is None

    def test_threshold_coerced_to_float(self):
        assert RunConfig(1990, 1990, cloud_cover_threshold="20").cloud_cover_threshold == 20.0

    def test_dict_round_trip(self):
        config = RunConfig(
            1990,
            1995,
            cloud_cover_threshold=20.0,
            variant="st",
            sensor="landsat7",
            emissivity_model=EmissivityModel(em_base=0.971),
        )
        restored = RunConfig.from_dict(config.to_dict())
        assert restored.to_dict() == config.to_dict()
        assert restored.emissivity_model.em_base == 0.971

    def test_from_dict_missing_key(self):
        with pytest.raises(ValidationError, match="end_year"):
            RunConfig.from_dict({"start_year": 1990})

    def test_repr(self):
        r = repr(RunConfig(1990, 1991))
        assert "1990-1991" in r
        assert "dn" in r
