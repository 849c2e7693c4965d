"""Country → continent lookup used to spot legs that cross an ocean."""
from __future__ import annotations

from enum import Enum
from typing import Dict, Optional


class Continent(str, Enum):
    AFRICA = "AF"
    ANTARCTICA = "AN"
    ASIA = "AS"
    EUROPE = "EU"
    NORTH_AMERICA = "NA"
    OCEANIA = "OC"
    SOUTH_AMERICA = "SA"


# ISO 3166-1 alpha-2 codes grouped by continent. Transcontinental countries
# appear exactly once (RU in Europe, TR and EG where listed).
_CONTINENT_MEMBERS: Dict[Continent, str] = {
    Continent.AFRICA: (
        "AO BF BI BJ BW CD CF CG CI CM CV DJ DZ EG EH ER ET GA GH GM GN GQ GW KE KM LR LS LY "
        "MA MG ML MR MU MW MZ NA NE NG RE RW SC SD SH SL SN SO SS ST SZ TD TG TN TZ UG YT ZA ZM ZW"
    ),
    Continent.ANTARCTICA: "AQ BV GS HM TF",
    Continent.ASIA: (
        "AE AF AM AZ BD BH BN BT CC CN CX CY GE HK ID IL IN IO IQ IR JO JP KG KH KP KR KW KZ LA "
        "LB LK MM MN MO MV MY NP OM PH PK PS QA SA SG SY TH TJ TL TM TR TW UZ VN YE"
    ),
    Continent.EUROPE: (
        "AD AL AT AX BA BE BG BY CH CZ DE DK EE ES FI FO FR GB GG GI GR HR HU IE IM IS IT JE "
        "LI LT LU LV MC MD ME MK MT NL NO PL PT RO RS RU SE SI SJ SK SM UA VA XK"
    ),
    Continent.NORTH_AMERICA: (
        "AG AI AW BB BL BM BQ BS BZ CA CR CU CW DM DO GD GL GP GT HN HT JM KN KY LC MF MQ MS MX "
        "NI PA PM PR SV SX TC TT US VC VG VI"
    ),
    Continent.OCEANIA: (
        "AS AU CK FJ FM GU KI MH MP NC NF NR NU NZ PF PG PN PW SB TK TO TV UM VU WF WS"
    ),
    Continent.SOUTH_AMERICA: "AR BO BR CL CO EC FK GF GY PE PY SR UY VE",
}

COUNTRY_CONTINENTS: Dict[str, Continent] = {
    code: continent
    for continent, members in _CONTINENT_MEMBERS.items()
    for code in members.split()
}


def continent_of(country_code: Optional[str]) -> Optional[Continent]:
    """Return the continent for an ISO alpha-2 code, or ``None`` when unknown."""
    if not country_code:
        return None
    return COUNTRY_CONTINENTS.get(country_code.strip().upper())


def is_cross_continental(code_a: Optional[str], code_b: Optional[str]) -> bool:
    """True only when both codes resolve and land on different continents.

    Unknown or missing codes never count as a crossing, so a failed geocode
    does not force a flight.
    """
    continent_a = continent_of(code_a)
    continent_b = continent_of(code_b)
    if continent_a is None or continent_b is None:
        return False
    return continent_a != continent_b
