#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tasktex/utils/codes.py
"""Lookup tables for languages and countries.

These are the default tables handed to the renderer through
:class:`tasktex.options.tex.TexRendererOptions`; callers may replace them.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

# Language code -> LaTeX preamble block configuring babel
BABEL_BY_LANGUAGE: Mapping[str, str] = MappingProxyType(
    {
        "eng": "\\usepackage[english]{babel}",
        "deu": "\\usepackage[german]{babel}",
        "ita": "\\usepackage[italian]{babel}",
        "fra": (
            "\\usepackage[french]{babel}\n"
            "\\frenchbsetup{ThinColonSpace=true}\n"
            "\\renewcommand*{\\FBguillspace}{\\hskip .4\\fontdimen2\\font plus .1\\fontdimen3\\font "
            "minus .3\\fontdimen4\\font \\relax}"
        ),
    }
)

# English country name -> ISO 3166-1 alpha-2 code
COUNTRY_CODE_BY_NAME: Mapping[str, str] = MappingProxyType(
    {
        "Algeria": "DZ",
        "Argentina": "AR",
        "Australia": "AU",
        "Austria": "AT",
        "Azerbaijan": "AZ",
        "Belarus": "BY",
        "Belgium": "BE",
        "Bolivia": "BO",
        "Bosnia and Herzegovina": "BA",
        "Brazil": "BR",
        "Bulgaria": "BG",
        "Canada": "CA",
        "Chile": "CL",
        "China": "CN",
        "Croatia": "HR",
        "Cyprus": "CY",
        "Czech Republic": "CZ",
        "Czechia": "CZ",
        "Denmark": "DK",
        "Ecuador": "EC",
        "Egypt": "EG",
        "Estonia": "EE",
        "Finland": "FI",
        "France": "FR",
        "Georgia": "GE",
        "Germany": "DE",
        "Greece": "GR",
        "Hungary": "HU",
        "Iceland": "IS",
        "India": "IN",
        "Indonesia": "ID",
        "Iran": "IR",
        "Ireland": "IE",
        "Israel": "IL",
        "Italy": "IT",
        "Japan": "JP",
        "Kazakhstan": "KZ",
        "Latvia": "LV",
        "Lithuania": "LT",
        "Luxembourg": "LU",
        "Malaysia": "MY",
        "Mexico": "MX",
        "Montenegro": "ME",
        "Netherlands": "NL",
        "New Zealand": "NZ",
        "North Macedonia": "MK",
        "Norway": "NO",
        "Pakistan": "PK",
        "Philippines": "PH",
        "Poland": "PL",
        "Portugal": "PT",
        "Romania": "RO",
        "Russia": "RU",
        "Saudi Arabia": "SA",
        "Serbia": "RS",
        "Singapore": "SG",
        "Slovakia": "SK",
        "Slovenia": "SI",
        "South Africa": "ZA",
        "South Korea": "KR",
        "Spain": "ES",
        "Sweden": "SE",
        "Switzerland": "CH",
        "Taiwan": "TW",
        "Thailand": "TH",
        "Tunisia": "TN",
        "Turkey": "TR",
        "Ukraine": "UA",
        "United Kingdom": "GB",
        "United States": "US",
        "Uruguay": "UY",
        "Uzbekistan": "UZ",
        "Vietnam": "VN",
    }
)
