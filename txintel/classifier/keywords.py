"""Keyword tables for topic, geography, impact and relevance classification.

All tables are immutable and ordered. Lookups walk them front to back and the
first matching entry wins, so reordering a table changes classification.
Keywords are lower-case and matched as substrings of case-folded text.
"""

from typing import Tuple

KeywordTable = Tuple[Tuple[str, Tuple[str, ...]], ...]

DEFAULT_CATEGORY = "General"
DEFAULT_LOCATION = "Statewide"


# =============================================================================
# Topic categories
# =============================================================================

CATEGORY_KEYWORDS: KeywordTable = (
    ("Land Development", (
        "land development", "subdivision", "master plan", "commercial development",
        "residential development", "site plan", "zoning", "annexation", "platting",
        "rezoning", "land use", "comprehensive plan", "development agreement",
    )),
    ("Construction Permits", (
        "construction permit", "building permit", "site development", "grading permit",
        "erosion control", "stormwater permit", "construction authorization", "storm water",
        "npdes", "swppp", "grading plan",
    )),
    ("Hunting & Wildlife", (
        "hunting", "hunting season", "game management", "wildlife", "deer", "waterfowl",
        "dove", "turkey", "public hunting land", "wildlife management area", "wma",
        "migratory bird", "duck", "goose", "bag limit", "season dates", "harvest",
    )),
    ("Public Land Access", (
        "public land", "state park", "public access", "land acquisition",
        "conservation easement", "public hunting", "recreational access", "park opening",
        "trail", "outdoor recreation", "public property", "land trust",
    )),
    ("Water & Aquifers", (
        "water rights", "water permit", "groundwater", "surface water", "river authority",
        "water district", "edwards aquifer", "trinity aquifer", "aquifer", "water quality",
        "drought", "water supply", "reservoir", "lake level", "groundwater district",
    )),
    ("Air Quality & Emissions", (
        "air permit", "air quality", "emissions", "title v",
        "prevention of significant deterioration", "psd permit", "nonattainment",
        "air authorization", "ozone", "particulate matter", "emission reduction",
        "air monitoring",
    )),
    ("Infrastructure Projects", (
        "infrastructure", "highway", "pipeline", "transmission line", "utility",
        "transportation project", "txdot", "road construction", "toll road", "interstate",
        "bridge", "railway",
    )),
    ("Coastal & Wetlands", (
        "coastal", "wetland", "gulf coast", "marsh", "coastal zone", "section 404",
        "dredge and fill", "beach", "erosion", "shoreline", "coastal erosion",
        "mitigation bank", "wetland delineation",
    )),
    ("Energy & Extraction", (
        "oil and gas", "pipeline", "mining", "quarry", "aggregate", "hydraulic fracturing",
        "drilling", "fracking", "natural gas", "coal", "renewable energy", "wind farm",
        "solar farm", "power plant", "refinery", "petrochemical",
    )),
    ("Conservation & Habitat", (
        "conservation", "habitat", "restoration", "mitigation", "endangered species",
        "biological opinion", "threatened species", "critical habitat", "ecological",
        "biodiversity", "native species", "invasive species",
    )),
    ("Enforcement & Compliance", (
        "enforcement action", "violation", "penalty", "fine", "compliance", "settlement",
        "consent decree", "notice of violation", "noncompliance", "corrective action",
    )),
    ("Waste & Remediation", (
        "waste", "hazardous waste", "cleanup", "remediation", "superfund", "brownfield",
        "landfill", "recycling", "solid waste", "contamination", "pollution",
    )),
)

FOCUS_AREAS: Tuple[str, ...] = tuple(name for name, _ in CATEGORY_KEYWORDS)


# =============================================================================
# Geography
# =============================================================================

LOCATIONS: KeywordTable = (
    # Major metros
    ("Austin Metro", ("austin", "travis county", "williamson county", "hays county")),
    ("DFW Metroplex", (
        "dallas", "fort worth", "dfw", "tarrant county", "collin county",
        "denton county", "rockwall",
    )),
    ("Houston Metro", (
        "houston", "harris county", "montgomery county", "fort bend", "brazoria",
        "galveston county",
    )),
    ("San Antonio Metro", ("san antonio", "bexar county", "comal county", "guadalupe county")),
    # Other cities
    ("El Paso", ("el paso",)),
    ("Corpus Christi", ("corpus christi", "nueces county")),
    ("Lubbock", ("lubbock",)),
    ("Amarillo", ("amarillo", "potter county")),
    ("Midland-Odessa", ("midland", "odessa", "ector county")),
    ("Waco", ("waco", "mclennan county")),
    ("Killeen-Temple", ("killeen", "temple", "bell county")),
    ("Border Region", ("brownsville", "mcallen", "laredo")),
    # Suburbs
    ("North Dallas Suburbs", ("mckinney", "frisco", "plano", "allen", "richardson", "carrollton")),
    ("North Austin Suburbs", ("round rock", "georgetown", "cedar park", "leander", "pflugerville")),
    ("North Houston Suburbs", ("the woodlands", "conroe", "spring", "tomball")),
    ("West/South Houston Suburbs", ("katy", "sugar land", "pearland", "league city")),
    # Regions
    ("West Texas", ("west texas", "permian basin", "big bend")),
    ("South Texas", ("south texas", "rio grande valley", "rgv", "valley")),
    ("East Texas", ("east texas", "piney woods", "tyler", "longview")),
    ("Texas Coast", ("texas coast", "gulf coast", "coastal texas", "port arthur", "beaumont")),
    ("Hill Country", ("hill country", "central texas", "fredericksburg", "kerrville")),
    ("Panhandle", ("panhandle", "texas panhandle")),
)

LOCATION_NAMES: Tuple[str, ...] = tuple(name for name, _ in LOCATIONS)


# =============================================================================
# Impact
# =============================================================================

HIGH_IMPACT_KEYWORDS: Tuple[str, ...] = (
    "major development", "master plan", "billion", "million",
    "new hunting land", "public land acquisition", "conservation easement",
    "infrastructure project", "pipeline approval", "major permit",
    "zoning change", "annexation", "land purchase", "hunting access",
    "emergency order", "enforcement action", "settlement", "lawsuit",
    "record fine", "shutdown", "emergency response", "major spill",
    "drought emergency", "water shortage", "critical habitat",
)

MEDIUM_IMPACT_KEYWORDS: Tuple[str, ...] = (
    "permit approved", "public notice", "comment period", "planning commission",
    "city council", "hearing", "application", "proposed rule", "authorization",
    "public hearing", "environmental assessment", "draft permit", "variance",
    "special use permit", "rezoning request",
)

# Days until a deadline (inclusive) that promote an item's impact tier.
HIGH_IMPACT_DEADLINE_WINDOW = (-1, 14)
MEDIUM_IMPACT_DEADLINE_WINDOW = (-1, 30)


# =============================================================================
# Relevance
# =============================================================================

LOW_VALUE_FILTERS: Tuple[str, ...] = (
    "office closed", "holiday hours", "staff announcement", "awards ceremony",
    "employee spotlight", "newsletter", "calendar", "reminder", "birthday",
    "anniversary",
)

TOPICAL_KEYWORDS: Tuple[str, ...] = (
    "environmental", "permit", "development", "construction", "water", "air",
    "land", "wildlife", "hunting", "conservation", "energy", "infrastructure",
    "wetland", "coastal", "regulation", "enforcement", "cleanup", "pollution",
    "emission", "habitat",
)
