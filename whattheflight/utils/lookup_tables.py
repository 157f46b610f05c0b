"""
Static airport and airline name tables.

Covers the airports and airlines you are most likely to see overhead in
the UK and Europe, plus the big long-haul hubs. Anything missing falls
through to the API lookups.
"""

from typing import Dict, Optional


# IATA code -> airport name and city
AIRPORTS: Dict[str, Dict[str, str]] = {
    # UK
    'LHR': {'name': 'Heathrow', 'city': 'London'},
    'LGW': {'name': 'Gatwick', 'city': 'London'},
    'STN': {'name': 'Stansted', 'city': 'London'},
    'LTN': {'name': 'Luton', 'city': 'London'},
    'LCY': {'name': 'City', 'city': 'London'},
    'MAN': {'name': 'Manchester', 'city': 'Manchester'},
    'BHX': {'name': 'Birmingham', 'city': 'Birmingham'},
    'EDI': {'name': 'Edinburgh', 'city': 'Edinburgh'},
    'GLA': {'name': 'Glasgow', 'city': 'Glasgow'},
    'BRS': {'name': 'Bristol', 'city': 'Bristol'},
    'NCL': {'name': 'Newcastle', 'city': 'Newcastle'},
    'LPL': {'name': 'Liverpool', 'city': 'Liverpool'},
    'LBA': {'name': 'Leeds Bradford', 'city': 'Leeds'},
    'EMA': {'name': 'East Midlands', 'city': 'Nottingham'},
    'SOU': {'name': 'Southampton', 'city': 'Southampton'},
    'ABZ': {'name': 'Aberdeen', 'city': 'Aberdeen'},
    'BFS': {'name': 'Belfast Intl', 'city': 'Belfast'},
    'BHD': {'name': 'Belfast City', 'city': 'Belfast'},
    'CWL': {'name': 'Cardiff', 'city': 'Cardiff'},
    # Ireland
    'DUB': {'name': 'Dublin', 'city': 'Dublin'},
    'SNN': {'name': 'Shannon', 'city': 'Shannon'},
    'ORK': {'name': 'Cork', 'city': 'Cork'},
    # Europe
    'CDG': {'name': 'Charles de Gaulle', 'city': 'Paris'},
    'ORY': {'name': 'Orly', 'city': 'Paris'},
    'AMS': {'name': 'Schiphol', 'city': 'Amsterdam'},
    'FRA': {'name': 'Frankfurt', 'city': 'Frankfurt'},
    'MUC': {'name': 'Munich', 'city': 'Munich'},
    'FCO': {'name': 'Fiumicino', 'city': 'Rome'},
    'MAD': {'name': 'Barajas', 'city': 'Madrid'},
    'BCN': {'name': 'El Prat', 'city': 'Barcelona'},
    'LIS': {'name': 'Lisbon', 'city': 'Lisbon'},
    'ZRH': {'name': 'Zurich', 'city': 'Zurich'},
    'VIE': {'name': 'Vienna', 'city': 'Vienna'},
    'BRU': {'name': 'Brussels', 'city': 'Brussels'},
    'CPH': {'name': 'Copenhagen', 'city': 'Copenhagen'},
    'OSL': {'name': 'Oslo', 'city': 'Oslo'},
    'ARN': {'name': 'Arlanda', 'city': 'Stockholm'},
    'HEL': {'name': 'Helsinki', 'city': 'Helsinki'},
    'ATH': {'name': 'Athens', 'city': 'Athens'},
    'IST': {'name': 'Istanbul', 'city': 'Istanbul'},
    # Holiday destinations
    'PMI': {'name': 'Palma', 'city': 'Mallorca'},
    'AGP': {'name': 'Malaga', 'city': 'Malaga'},
    'ALC': {'name': 'Alicante', 'city': 'Alicante'},
    'TFS': {'name': 'Tenerife South', 'city': 'Tenerife'},
    'LPA': {'name': 'Gran Canaria', 'city': 'Gran Canaria'},
    'FAO': {'name': 'Faro', 'city': 'Faro'},
    'NCE': {'name': 'Nice', 'city': 'Nice'},
    # North America
    'JFK': {'name': 'JFK', 'city': 'New York'},
    'EWR': {'name': 'Newark', 'city': 'New York'},
    'LGA': {'name': 'LaGuardia', 'city': 'New York'},
    'LAX': {'name': 'LAX', 'city': 'Los Angeles'},
    'ORD': {'name': "O'Hare", 'city': 'Chicago'},
    'DFW': {'name': 'DFW', 'city': 'Dallas'},
    'ATL': {'name': 'Hartsfield', 'city': 'Atlanta'},
    'MIA': {'name': 'Miami', 'city': 'Miami'},
    'SFO': {'name': 'SFO', 'city': 'San Francisco'},
    'BOS': {'name': 'Logan', 'city': 'Boston'},
    'IAD': {'name': 'Dulles', 'city': 'Washington'},
    'SEA': {'name': 'Seattle', 'city': 'Seattle'},
    'YYZ': {'name': 'Pearson', 'city': 'Toronto'},
    'YVR': {'name': 'Vancouver', 'city': 'Vancouver'},
    'YUL': {'name': 'Montreal', 'city': 'Montreal'},
    # Middle East
    'DXB': {'name': 'Dubai', 'city': 'Dubai'},
    'AUH': {'name': 'Abu Dhabi', 'city': 'Abu Dhabi'},
    'DOH': {'name': 'Hamad', 'city': 'Doha'},
    # Asia
    'HKG': {'name': 'Hong Kong', 'city': 'Hong Kong'},
    'SIN': {'name': 'Changi', 'city': 'Singapore'},
    'NRT': {'name': 'Narita', 'city': 'Tokyo'},
    'HND': {'name': 'Haneda', 'city': 'Tokyo'},
    'ICN': {'name': 'Incheon', 'city': 'Seoul'},
    'BKK': {'name': 'Suvarnabhumi', 'city': 'Bangkok'},
    'PEK': {'name': 'Beijing', 'city': 'Beijing'},
    'PVG': {'name': 'Pudong', 'city': 'Shanghai'},
    'DEL': {'name': 'Indira Gandhi', 'city': 'Delhi'},
    'BOM': {'name': 'Mumbai', 'city': 'Mumbai'},
    # Oceania
    'SYD': {'name': 'Sydney', 'city': 'Sydney'},
    'MEL': {'name': 'Melbourne', 'city': 'Melbourne'},
    'AKL': {'name': 'Auckland', 'city': 'Auckland'},
}

# ICAO airline designator -> airline name
AIRLINES: Dict[str, str] = {
    # UK & Ireland
    'BAW': 'British Airways',
    'EZY': 'easyJet',
    'RYR': 'Ryanair',
    'TOM': 'TUI Airways',
    'VIR': 'Virgin Atlantic',
    'EIN': 'Aer Lingus',
    'LOG': 'Loganair',
    'BEE': 'Flybe',
    'SHT': 'BA Shuttle',
    'CFE': 'BA CityFlyer',
    # European
    'AFR': 'Air France',
    'DLH': 'Lufthansa',
    'KLM': 'KLM',
    'IBE': 'Iberia',
    'TAP': 'TAP Portugal',
    'SAS': 'Scandinavian',
    'FIN': 'Finnair',
    'AZA': 'ITA Airways',
    'SWR': 'Swiss',
    'AUA': 'Austrian',
    'BEL': 'Brussels Airlines',
    'VLG': 'Vueling',
    'EWG': 'Eurowings',
    'WZZ': 'Wizz Air',
    'NOZ': 'Norwegian',
    # North American
    'AAL': 'American Airlines',
    'UAL': 'United Airlines',
    'DAL': 'Delta Air Lines',
    'SWA': 'Southwest',
    'JBU': 'JetBlue',
    'ACA': 'Air Canada',
    'WJA': 'WestJet',
    # Middle East
    'UAE': 'Emirates',
    'ETD': 'Etihad',
    'QTR': 'Qatar Airways',
    'THY': 'Turkish Airlines',
    'GFA': 'Gulf Air',
    'SVA': 'Saudia',
    'MEA': 'Middle East Airlines',
    # Asia Pacific
    'SIA': 'Singapore Airlines',
    'CPA': 'Cathay Pacific',
    'JAL': 'Japan Airlines',
    'ANA': 'All Nippon Airways',
    'KAL': 'Korean Air',
    'CES': 'China Eastern',
    'CSN': 'China Southern',
    'CCA': 'Air China',
    'QFA': 'Qantas',
    'ANZ': 'Air New Zealand',
    'MAS': 'Malaysia Airlines',
    'THA': 'Thai Airways',
    'EVA': 'EVA Air',
    # Cargo
    'FDX': 'FedEx',
    'UPS': 'UPS',
    'GTI': 'Atlas Air',
}


def get_airline_name(icao: str) -> Optional[str]:
    """Look up an airline name from its three-letter ICAO designator."""
    return AIRLINES.get((icao or '').strip().upper())


def get_static_airport(code: str) -> Optional[Dict[str, str]]:
    """Look up an airport in the built-in table."""
    airport = AIRPORTS.get((code or '').strip().upper())
    return dict(airport) if airport else None
