"""Unit tests for Pydantic data models."""

import pytest
from pydantic import ValidationError

from app.errors import InvalidConfigurationError
from app.models import (
    ArtifactMetadata, BatchState, ConversionResult, FitMode, ImageCandidate, Orientation,
    PageConfiguration, PendingImage, PlacementRect, StepTiming, VerificationResult,
)


class TestPageConfiguration:
    def test_defaults(self):
        cfg = PageConfiguration()
        assert (cfg.page_size, cfg.orientation, cfg.fit_mode) == ("a4", "portrait", "fit")

    def test_validated_normalises_case(self):
        cfg = PageConfiguration(page_size="Letter", orientation=" LANDSCAPE ", fit_mode="Fill").validated()
        assert cfg == PageConfiguration(page_size="letter", orientation="landscape", fit_mode="fill")

    def test_enum_members_accepted(self):
        cfg = PageConfiguration(orientation=Orientation.LANDSCAPE, fit_mode=FitMode.ORIGINAL).validated()
        assert cfg.orientation == "landscape"
        assert cfg.fit_mode == "original"

    @pytest.mark.parametrize("kwargs,field", [
        ({"page_size": "b5"}, "page size"),
        ({"orientation": "diagonal"}, "orientation"),
        ({"fit_mode": "stretch"}, "fit mode"),
    ])
    def test_unknown_values_rejected(self, kwargs, field):
        with pytest.raises(InvalidConfigurationError) as exc_info:
            PageConfiguration(**kwargs).validated()
        assert exc_info.value.field == field

    def test_frozen(self):
        cfg = PageConfiguration()
        with pytest.raises(ValidationError):
            cfg.page_size = "letter"


class TestPlacementRect:
    def test_edges(self):
        rect = PlacementRect(x=10, y=20, width=100, height=50)
        assert rect.right == 110
        assert rect.bottom == 70


class TestImageModels:
    def test_candidate_size_from_payload(self):
        c = ImageCandidate(data=b"abc", media_type="image/png", name="a.png")
        assert c.size == 3
        assert c.is_png

    def test_candidate_explicit_size(self):
        c = ImageCandidate(data=b"abc", media_type="image/png", name="a.png", size=99)
        assert c.size == 99

    @pytest.mark.parametrize("media_type", ["image/jpeg", "", "application/octet-stream", "image/pngx"])
    def test_candidate_not_png(self, media_type):
        assert not ImageCandidate(data=b"", media_type=media_type, name="x").is_png

    def test_pending_from_candidate(self):
        c = ImageCandidate(data=b"abc", media_type="image/png", name="a.png")
        p = PendingImage.from_candidate(c)
        assert (p.data, p.name, p.size) == (b"abc", "a.png", 3)

    def test_payload_not_in_repr(self):
        p = PendingImage(data=b"secret-bytes", name="a.png", size=12)
        assert "secret-bytes" not in repr(p)


class TestConversionResult:
    def test_minimal(self):
        r = ConversionResult(
            job_id="abc123",
            config=PageConfiguration(),
            artifact=ArtifactMetadata(filename="a.pdf", size_bytes=1000),
        )
        assert r.placements == []
        assert r.verification is None

    def test_step_timing_defaults(self):
        st = StepTiming(step="assemble", duration_ms=10)
        assert st.status == "ok"
        assert st.detail == ""

    def test_verification_defaults(self):
        vr = VerificationResult()
        assert vr.passed is False
        assert vr.images_per_page == []

    def test_verification_schema_example(self):
        schema = VerificationResult.model_json_schema()
        assert schema["example"]["checks_total"] == 4
        assert "Config" not in vars(VerificationResult)

    def test_batch_states(self):
        assert BatchState.EMPTY == "EMPTY"
        assert BatchState.ASSEMBLED == "ASSEMBLED"
