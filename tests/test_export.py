import json
from datetime import datetime, timezone

import pytest

from lenscat import export
from lenscat.models import Lens, LensSpecification

HEADER = (
    "Manufacturer,Mount,Model,Focal Length (mm),Max Aperture,"
    "Min Focus Distance (m),Max Magnification,Teleconverters"
)


def _lens(model, teleconverters=()):
    return Lens(
        id=1,
        manufacturer="Sony",
        mount="E",
        model=model,
        teleconverters=teleconverters,
        data=[
            LensSpecification(
                focal_length=90, aperture=2.8, min_focus=0.28, magnification=1.0
            )
        ],
    )


def test_csv_rows(catalog):
    lines = export.to_csv(catalog).splitlines()
    assert lines[0] == HEADER
    assert len(lines) == 1 + sum(len(lens.data) for lens in catalog)
    assert "Nikon,Z,NIKKOR Z 70-200mm f/2.8 VR S,70,2.8,0.55,0.051,1.4x;2x" in lines
    assert "Nikon,Z,NIKKOR Z 70-200mm f/2.8 VR S,200,2.8,0.55,0.2,1.4x;2x" in lines
    assert "Sony,E,FE 90mm F2.8 Macro G OSS,90,2.8,0.28,1,None" in lines


def test_csv_leaves_unknown_values_empty(catalog):
    lines = export.to_csv(catalog).splitlines()
    assert "Canon,RF,RF 800mm F11 IS STM,800,11,6,,None" in lines
    assert "Canon,RF,RF 24-240mm F4-6.3 IS USM,240,,0.5,4.76,None" in lines


def test_csv_keeps_full_precision(lenses_by_id):
    aperture = lenses_by_id[3].data[1].aperture
    lines = export.to_csv([lenses_by_id[3]]).splitlines()
    model = "NIKKOR Z DX 18-140mm f/3.5-6.3 VR"
    assert lines[2] == f"Nikon,Z,{model},70,{aperture!r},0.2,0.305,None"
    assert "4.6934426229508" in lines[2]


@pytest.mark.parametrize(
    "value, want",
    [
        (70.0, "70"),
        (0.051, "0.051"),
        (4.693442622950819, "4.693442622950819"),
        (1234567.5, "1234567.5"),
        (0.000123, "0.000123"),
        (float("nan"), ""),
    ],
)
def test_format_number(value, want):
    assert export.format_number(value) == want


@pytest.mark.parametrize(
    "model, want",
    [
        ('Lens, "Special"', '"Lens, ""Special"""'),
        ('12" Portrait', '"12"" Portrait"'),
        ("Plain", "Plain"),
    ],
)
def test_csv_quoting(model, want):
    lines = export.to_csv([_lens(model)]).splitlines()
    assert lines[1].startswith(f"Sony,E,{want},90,")


def test_csv_quotes_newlines():
    text = export.to_csv([_lens("Two\nLines")])
    assert '"Two\nLines"' in text


@pytest.mark.parametrize(
    "teleconverters, want",
    [
        ((), "None"),
        ((1.4,), "1.4x"),
        ((1.4, 2.0), "1.4x;2x"),
        ((1.4, 1.7, 2.0), "1.4x;1.7x;2x"),
    ],
)
def test_format_teleconverters(teleconverters, want):
    assert export.format_teleconverters(teleconverters) == want


def test_csv_of_nothing():
    assert export.to_csv([]) == HEADER + "\n"


def test_csv_to_file(catalog, tmp_path):
    path = tmp_path / "lens-data.csv"
    assert export.to_csv(catalog, path) is None
    assert path.read_text(encoding="utf-8") == export.to_csv(catalog)


def test_json_document(catalog):
    export_date = datetime(2026, 10, 18, tzinfo=timezone.utc)
    doc = json.loads(export.to_json(catalog, export_date))
    assert doc["exportDate"].startswith("2026-10-18T00:00:00")
    assert doc["totalLenses"] == len(catalog)
    assert [lens["id"] for lens in doc["lenses"]] == [lens.id for lens in catalog]

    first = doc["lenses"][0]
    assert first["manufacturer"] == "Nikon"
    assert first["shortName"] == "Z DX 18-140"
    assert first["cropFactor"] == 1.5
    assert set(first["data"][0]) == {
        "focalLength",
        "aperture",
        "minFocus",
        "magnification",
        "teleconverter",
    }


def test_json_keeps_unknown_values_as_null(catalog):
    doc = json.loads(export.to_json(catalog))
    lens = next(lens for lens in doc["lenses"] if lens["id"] == 21)
    assert lens["data"][0]["magnification"] is None
    assert lens["teleconverters"] == []


def test_json_of_nothing():
    doc = json.loads(export.to_json([]))
    assert doc["totalLenses"] == 0
    assert doc["lenses"] == []
