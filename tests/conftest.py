import copy
from typing import Any, Dict, List

import pytest

import lenscat.catalog

_sources: List[Dict[str, Any]] = [
    {
        "manufacturer": "Nikon",
        "mount": "Z",
        "lenses": [
            {
                "id": 1,
                "model": "NIKKOR Z 70-200mm f/2.8 VR S",
                "weight": 1360,
                "filter": 77,
                "teleconverters": [1.4, 2.0],
                "data": [
                    {
                        "focalLength": 70,
                        "aperture": 2.8,
                        "minFocus": 0.55,
                        "magnification": -1,
                    },
                    {
                        "focalLength": 200,
                        "aperture": 2.8,
                        "minFocus": 0.55,
                        "magnification": 0.20,
                    },
                ],
            },
            {
                "id": 2,
                "model": "NIKKOR Z 24-120mm f/4 S",
                "teleconverters": [],
                "data": [
                    {
                        "focalLength": 24,
                        "aperture": 4,
                        "minFocus": 0.35,
                        "magnification": 0.13,
                    },
                    {
                        "focalLength": 120,
                        "aperture": 4,
                        "minFocus": 0.35,
                        "magnification": 0.39,
                    },
                ],
            },
            {
                "id": 3,
                "model": "NIKKOR Z DX 18-140mm f/3.5-6.3 VR",
                "shortName": "Z DX 18-140",
                "cropFactor": 1.5,
                "teleconverters": [],
                "data": [
                    {
                        "focalLength": 18,
                        "aperture": 3.5,
                        "minFocus": 0.2,
                        "magnification": -1,
                    },
                    {
                        "focalLength": 70,
                        "aperture": -1,
                        "minFocus": 0.2,
                        "magnification": -1,
                    },
                    {
                        "focalLength": 140,
                        "aperture": 6.3,
                        "minFocus": 0.38,
                        "magnification": 0.33,
                    },
                ],
            },
        ],
    },
    {
        "manufacturer": "Sony",
        "mount": "E",
        "lenses": [
            {
                "id": 10,
                "model": "FE 90mm F2.8 Macro G OSS",
                "data": [
                    {
                        "focalLength": 90,
                        "aperture": 2.8,
                        "minFocus": 0.28,
                        "magnification": 1.0,
                    },
                ],
            },
            {
                "id": 11,
                "model": "FE 100-400mm F4.5-5.6 GM OSS",
                "teleconverterTypes": ["1.4x", "2x"],
                "data": [
                    {
                        "focalLength": 100,
                        "aperture": 4.5,
                        "minFocus": 0.98,
                        "magnification": -1,
                    },
                    {
                        "focalLength": 400,
                        "aperture": 5.6,
                        "minFocus": 1.7,
                        "magnification": 0.35,
                    },
                ],
            },
        ],
    },
    {
        "manufacturer": "Canon",
        "mount": "RF",
        "lenses": [
            {
                "id": 20,
                "model": "RF 100mm F2.8 L Macro IS USM",
                "data": [
                    {
                        "focalLength": 100,
                        "aperture": 2.8,
                        "minFocus": 0.26,
                        "magnification": 1.4,
                    },
                ],
            },
            {
                "id": 21,
                "model": "RF 800mm F11 IS STM",
                "data": [
                    {
                        "focalLength": 800,
                        "aperture": 11,
                        "minFocus": 6,
                        "magnification": -1,
                    },
                ],
            },
            {
                "id": 22,
                "model": "RF 24-240mm F4-6.3 IS USM",
                "data": [
                    {
                        "focalLength": 24,
                        "aperture": 4,
                        "minFocus": 0.5,
                        "magnification": 0.26,
                    },
                    {
                        "focalLength": 240,
                        "aperture": -1,
                        "minFocus": 0.5,
                        "magnification": -1,
                    },
                ],
            },
        ],
    },
]

# Lens IDs in catalog order (min focal length, then max focal length)
_catalog_order = [3, 2, 22, 1, 10, 20, 11, 21]


@pytest.fixture
def sources() -> List[Dict[str, Any]]:
    return copy.deepcopy(_sources)


@pytest.fixture
def catalog(sources):
    return lenscat.catalog.build_catalog(sources)


@pytest.fixture
def lenses_by_id(catalog):
    return {lens.id: lens for lens in catalog}


@pytest.fixture
def catalog_order() -> List[int]:
    return list(_catalog_order)
