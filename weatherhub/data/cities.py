"""
Static directory of major world cities.

Used for offline location search and to decorate search results with
country flags. Search ranking is a weighted score; the classic
"name prefix first, then population" order is the same scorer with every
weight except the prefix tier collapsed to zero.
"""

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2


@dataclass(frozen=True)
class CityData:
    name: str
    country: str
    region: str
    latitude: float
    longitude: float
    population: int | None = None


@dataclass(frozen=True)
class RankingWeights:
    """Score contributions for each kind of match"""

    exact_name: float
    name_prefix: float
    name_contains: float
    country_contains: float
    region_contains: float
    population_bonus: float


ENHANCED_WEIGHTS = RankingWeights(
    exact_name=1000,
    name_prefix=100,
    name_contains=50,
    country_contains=30,
    region_contains=20,
    population_bonus=2,
)

# Prefix tier only; population still breaks ties.
BASIC_WEIGHTS = RankingWeights(
    exact_name=0,
    name_prefix=1,
    name_contains=0,
    country_contains=0,
    region_contains=0,
    population_bonus=0,
)


MAJOR_CITIES: tuple[CityData, ...] = (
    CityData("New York", "US", "New York", 40.7128, -74.0060, 8336817),
    CityData("Los Angeles", "US", "California", 34.0522, -118.2437, 3979576),
    CityData("Chicago", "US", "Illinois", 41.8781, -87.6298, 2693976),
    CityData("Houston", "US", "Texas", 29.7604, -95.3698, 2320268),
    CityData("Miami", "US", "Florida", 25.7617, -80.1918, 467963),
    CityData("San Francisco", "US", "California", 37.7749, -122.4194, 881549),
    CityData("Seattle", "US", "Washington", 47.6062, -122.3321, 753675),
    CityData("Las Vegas", "US", "Nevada", 36.1699, -115.1398, 651319),
    CityData("Toronto", "CA", "Ontario", 43.6532, -79.3832, 2731571),
    CityData("Vancouver", "CA", "British Columbia", 49.2827, -123.1207, 675218),
    CityData("Montreal", "CA", "Quebec", 45.5017, -73.5673, 1780000),
    CityData("Calgary", "CA", "Alberta", 51.0447, -114.0719, 1336000),
    CityData("London", "GB", "England", 51.5074, -0.1278, 8982000),
    CityData("Birmingham", "GB", "England", 52.4862, -1.8904, 1141816),
    CityData("Manchester", "GB", "England", 53.4808, -2.2426, 547000),
    CityData("Edinburgh", "GB", "Scotland", 55.9533, -3.1883, 518500),
    CityData("Berlin", "DE", "Berlin", 52.5200, 13.4050, 3669491),
    CityData("Munich", "DE", "Bavaria", 48.1351, 11.5820, 1488202),
    CityData("Hamburg", "DE", "Hamburg", 53.5511, 9.9937, 1899160),
    CityData("Frankfurt", "DE", "Hesse", 50.1109, 8.6821, 753056),
    CityData("Paris", "FR", "Île-de-France", 48.8566, 2.3522, 2161000),
    CityData("Lyon", "FR", "Auvergne-Rhône-Alpes", 45.7640, 4.8357, 518635),
    CityData("Marseille", "FR", "Provence-Alpes-Côte d'Azur", 43.2965, 5.3698, 870731),
    CityData("Nice", "FR", "Provence-Alpes-Côte d'Azur", 43.7102, 7.2620, 342637),
    CityData("Rome", "IT", "Lazio", 41.9028, 12.4964, 2872800),
    CityData("Milan", "IT", "Lombardy", 45.4642, 9.1900, 1396059),
    CityData("Naples", "IT", "Campania", 40.8518, 14.2681, 967069),
    CityData("Florence", "IT", "Tuscany", 43.7696, 11.2558, 382258),
    CityData("Madrid", "ES", "Madrid", 40.4168, -3.7038, 6642000),
    CityData("Barcelona", "ES", "Catalonia", 41.3851, 2.1734, 1620343),
    CityData("Valencia", "ES", "Valencia", 39.4699, -0.3763, 794288),
    CityData("Seville", "ES", "Andalusia", 37.3891, -5.9845, 688711),
    CityData("Tokyo", "JP", "Tokyo", 35.6762, 139.6503, 37400068),
    CityData("Osaka", "JP", "Osaka", 34.6937, 135.5023, 19281000),
    CityData("Kyoto", "JP", "Kyoto", 35.0116, 135.7681, 1475183),
    CityData("Yokohama", "JP", "Kanagawa", 35.4437, 139.6380, 3777491),
    CityData("Beijing", "CN", "Beijing", 39.9042, 116.4074, 21540000),
    CityData("Shanghai", "CN", "Shanghai", 31.2304, 121.4737, 27058480),
    CityData("Guangzhou", "CN", "Guangdong", 23.1291, 113.2644, 15300000),
    CityData("Shenzhen", "CN", "Guangdong", 22.5431, 114.0579, 17560061),
    CityData("Mumbai", "IN", "Maharashtra", 19.0760, 72.8777, 20411274),
    CityData("Delhi", "IN", "Delhi", 28.7041, 77.1025, 32900000),
    CityData("Bangalore", "IN", "Karnataka", 12.9716, 77.5946, 12300000),
    CityData("Chennai", "IN", "Tamil Nadu", 13.0827, 80.2707, 10971108),
    CityData("Sydney", "AU", "New South Wales", -33.8688, 151.2093, 5312163),
    CityData("Melbourne", "AU", "Victoria", -37.8136, 144.9631, 5078193),
    CityData("Brisbane", "AU", "Queensland", -27.4698, 153.0251, 2560720),
    CityData("Perth", "AU", "Western Australia", -31.9505, 115.8605, 2125114),
    CityData("São Paulo", "BR", "São Paulo", -23.5558, -46.6396, 22430000),
    CityData("Rio de Janeiro", "BR", "Rio de Janeiro", -22.9068, -43.1729, 13458075),
    CityData("Salvador", "BR", "Bahia", -12.9714, -38.5014, 2886698),
    CityData("Brasília", "BR", "Federal District", -15.8267, -47.9218, 3055149),
    CityData("Moscow", "RU", "Moscow", 55.7558, 37.6176, 12506468),
    CityData("Saint Petersburg", "RU", "Saint Petersburg", 59.9311, 30.3609, 5383890),
    CityData("Novosibirsk", "RU", "Novosibirsk Oblast", 55.0084, 82.9357, 1625631),
    CityData("Yekaterinburg", "RU", "Sverdlovsk Oblast", 56.8431, 60.6454, 1495066),
    CityData("Seoul", "KR", "Seoul", 37.5665, 126.9780, 9720846),
    CityData("Busan", "KR", "Busan", 35.1796, 129.0756, 3413841),
    CityData("Incheon", "KR", "Incheon", 37.4563, 126.7052, 2963645),
    CityData("Mexico City", "MX", "Mexico City", 19.4326, -99.1332, 21804515),
    CityData("Guadalajara", "MX", "Jalisco", 20.6597, -103.3496, 5268642),
    CityData("Monterrey", "MX", "Nuevo León", 25.6866, -100.3161, 5341171),
    CityData("Buenos Aires", "AR", "Buenos Aires", -34.6118, -58.3960, 15364000),
    CityData("Córdoba", "AR", "Córdoba", -31.4201, -64.1888, 1454536),
    CityData("Rosario", "AR", "Santa Fe", -32.9442, -60.6505, 1276000),
    CityData("Dubai", "AE", "Dubai", 25.2048, 55.2708, 3411200),
    CityData("Istanbul", "TR", "Istanbul", 41.0082, 28.9784, 15519267),
    CityData("Tehran", "IR", "Tehran", 35.6892, 51.3890, 9259009),
    CityData("Riyadh", "SA", "Riyadh", 24.7136, 46.6753, 7676654),
    CityData("Cairo", "EG", "Cairo", 30.0444, 31.2357, 20901000),
    CityData("Lagos", "NG", "Lagos", 6.5244, 3.3792, 15388000),
    CityData("Cape Town", "ZA", "Western Cape", -33.9249, 18.4241, 4618000),
    CityData("Johannesburg", "ZA", "Gauteng", -26.2041, 28.0473, 5635127),
    CityData("Singapore", "SG", "Singapore", 1.3521, 103.8198, 5685807),
    CityData("Bangkok", "TH", "Bangkok", 13.7563, 100.5018, 10156000),
    CityData("Jakarta", "ID", "Jakarta", -6.2088, 106.8456, 10770487),
    CityData("Manila", "PH", "Metro Manila", 14.5995, 120.9842, 13484462),
    CityData("Ho Chi Minh City", "VN", "Ho Chi Minh City", 10.8231, 106.6297, 9000000),
    CityData("Kuala Lumpur", "MY", "Kuala Lumpur", 3.1390, 101.6869, 1768000),
)

COUNTRY_FLAGS = {
    "US": "🇺🇸", "CA": "🇨🇦", "GB": "🇬🇧", "DE": "🇩🇪", "FR": "🇫🇷",
    "IT": "🇮🇹", "ES": "🇪🇸", "JP": "🇯🇵", "CN": "🇨🇳", "IN": "🇮🇳",
    "AU": "🇦🇺", "BR": "🇧🇷", "RU": "🇷🇺", "KR": "🇰🇷", "MX": "🇲🇽",
    "AR": "🇦🇷", "AE": "🇦🇪", "TR": "🇹🇷", "IR": "🇮🇷", "SA": "🇸🇦",
    "EG": "🇪🇬", "NG": "🇳🇬", "ZA": "🇿🇦", "SG": "🇸🇬", "TH": "🇹🇭",
    "ID": "🇮🇩", "PH": "🇵🇭", "VN": "🇻🇳", "MY": "🇲🇾",
}  # fmt: skip

UNKNOWN_FLAG = "🌍"


def _matches(city: CityData, query: str) -> bool:
    return (
        query in city.name.lower()
        or query in city.country.lower()
        or query in city.region.lower()
    )


def score_city(
    city: CityData, query: str, weights: RankingWeights = ENHANCED_WEIGHTS
) -> float:
    """Weighted relevance of a city for an already-normalized query"""
    name = city.name.lower()
    score = 0.0

    if name == query:
        score += weights.exact_name
    if name.startswith(query):
        score += weights.name_prefix
    if query in name:
        score += weights.name_contains
    if query in city.country.lower():
        score += weights.country_contains
    if query in city.region.lower():
        score += weights.region_contains
    if city.population:
        score += math.log10(city.population) * weights.population_bonus

    return score


def search_cities(
    query: str,
    limit: int = 10,
    weights: RankingWeights = ENHANCED_WEIGHTS,
    cities: Iterable[CityData] = MAJOR_CITIES,
) -> list[CityData]:
    """
    Case-insensitive substring search over name, country and region.

    Results are ordered by score, then by population (missing counts as 0).
    Queries shorter than two characters (measured before trimming) or made
    only of whitespace return no results.
    """
    if not query or len(query) < MIN_QUERY_LENGTH:
        return []

    normalized = query.lower().strip()
    if not normalized:
        return []
    matches = [city for city in cities if _matches(city, normalized)]
    matches.sort(
        key=lambda city: (
            -score_city(city, normalized, weights),
            -(city.population or 0),
        )
    )

    logger.debug(f"City search for '{normalized}' matched {len(matches)} cities")
    return matches[:limit]


def get_country_flag(country_code: str) -> str:
    """Emoji flag for a two-letter country code; a globe for anything unknown"""
    return COUNTRY_FLAGS.get((country_code or "").upper(), UNKNOWN_FLAG)
