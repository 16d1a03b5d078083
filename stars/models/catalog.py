# stars/models/catalog.py
#
# Static reference data. Destinations and packages are never persisted;
# the accommodation rows are the seed for the accommodations table.

from typing import Any, Dict, List, Union

from stars.models.base import CamelModel


class Destination(CamelModel):
    id: str
    name: str
    description: str
    distance: str
    travel_time: str
    temperature: str
    color: str
    activities: List[str]


class TravelPackage(CamelModel):
    id: str
    name: str
    description: str
    price: int
    accommodation: str
    meals: str
    spacewalk: Union[bool, str]
    surface_tours: str
    training: str
    medical_support: str
    souvenirs: str


DESTINATIONS: List[Destination] = [
    Destination(
        id="mercury",
        name="Mercury",
        description="The closest planet to the sun, offering extreme temperature variations "
                    "and challenging but rewarding exploration opportunities.",
        distance="57.9 million km",
        travel_time="2-3 months",
        temperature="430°C (day) to -180°C (night)",
        color="#A9A9A9",
        activities=["Crater exploration", "Solar observation", "Extreme terrain hiking"],
    ),
    Destination(
        id="venus",
        name="Venus",
        description="Known for its thick atmosphere and extreme surface pressure, Venus offers "
                    "spectacular cloud-top viewing platforms.",
        distance="108.2 million km",
        travel_time="3-4 months",
        temperature="462°C (constant)",
        color="#E6A727",
        activities=["Cloud-top observatories", "Atmospheric diving", "Sulfuric sunrise viewing"],
    ),
    Destination(
        id="earth",
        name="Earth",
        description="Our home planet, offering a return journey with breathtaking views of the "
                    "Blue Marble from space.",
        distance="149.6 million km",
        travel_time="N/A (Home)",
        temperature="15°C (average)",
        color="#2E86C1",
        activities=["Orbital photography", "Zero-G recreation", "Space station tours"],
    ),
    Destination(
        id="mars",
        name="Mars",
        description="The Red Planet, featuring massive canyons, extinct volcanoes, and emerging "
                    "human colonies.",
        distance="227.9 million km",
        travel_time="6-8 months",
        temperature="-65°C (average)",
        color="#C0392B",
        activities=["Colony tours", "Olympus Mons expedition", "Desert rover adventures"],
    ),
    Destination(
        id="saturn",
        name="Saturn Rings Tour",
        description="Experience the magnificent rings up close with our exclusive tour around "
                    "this gas giant's unique features.",
        distance="1.4 billion km",
        travel_time="3-4 years",
        temperature="-178°C (average)",
        color="#F5CBA7",
        activities=["Ring surfing", "Moonlet hopping", "Cassini division cruise"],
    ),
]


PACKAGES: List[TravelPackage] = [
    TravelPackage(
        id="basic",
        name="Basic",
        description="Essential Experience",
        price=250000,
        accommodation="Shared Cabin",
        meals="Standard Menu",
        spacewalk=False,
        surface_tours="Group Tour",
        training="3 Days",
        medical_support="Standard",
        souvenirs="Digital Photos",
    ),
    TravelPackage(
        id="premium",
        name="Premium",
        description="Enhanced Journey",
        price=450000,
        accommodation="Private Suite",
        meals="Premium Menu",
        spacewalk="1 Session",
        surface_tours="Small Group",
        training="7 Days",
        medical_support="Enhanced",
        souvenirs="Photo Book + Video",
    ),
    TravelPackage(
        id="ultimate",
        name="Ultimate",
        description="Luxury Expedition",
        price=750000,
        accommodation="Luxury Module",
        meals="Gourmet Dining",
        spacewalk="Unlimited",
        surface_tours="Private Guide",
        training="14 Days",
        medical_support="Dedicated Doctor",
        souvenirs="Lunar/Martian Rock",
    ),
]


_UNSPLASH = "?ixlib=rb-4.0.3&auto=format&fit=crop&w=800&q=80"

ACCOMMODATION_SEED: List[Dict[str, Any]] = [
    {
        "name": "Orbital Luxury Suite",
        "location": "Earth Orbit, 400km",
        "description": "Experience weightlessness in our premium orbital suites with panoramic Earth views.",
        "price_per_night": 35000,
        "image": "https://images.unsplash.com/photo-1517495306984-f84210f9daa8" + _UNSPLASH,
        "tier": "premium",
        "amenities": ["Panoramic Views", "Zero-G Spa", "Gourmet Dining"],
    },
    {
        "name": "Lunar Dome Residence",
        "location": "Lunar Surface, Sea of Tranquility",
        "description": "Luxury domes with Earth views and private lunar terrace access.",
        "price_per_night": 75000,
        "image": "https://images.unsplash.com/photo-1454789548928-9efd52dc4031" + _UNSPLASH,
        "tier": "luxury",
        "amenities": ["Private Terrace", "Earth View", "Lunar Rover"],
    },
    {
        "name": "Mars Habitat Suite",
        "location": "Martian Colony, Olympus Mons",
        "description": "Experience the red planet in comfort with artificial gravity and hydroponic gardens.",
        "price_per_night": 25000,
        "image": "https://images.unsplash.com/photo-1444703686981-a3abbc4d4fe3" + _UNSPLASH,
        "tier": "standard",
        "amenities": ["Artificial Gravity", "Hydroponic Garden", "VR Suite"],
    },
    {
        "name": "Zero-G Capsule",
        "location": "Low Earth Orbit Station",
        "description": "Affordable orbital accommodation with all essential amenities.",
        "price_per_night": 8500,
        "image": "https://images.unsplash.com/photo-1446776811953-b23d57bd21aa" + _UNSPLASH,
        "tier": "budget",
        "amenities": ["Compact Design", "Shared Facilities", "Basic Amenities"],
    },
    {
        "name": "Saturn Ring View Suite",
        "location": "Saturn Orbital Station",
        "description": "Our most luxurious offering with unparalleled views of Saturn's rings.",
        "price_per_night": 125000,
        "image": "https://images.unsplash.com/photo-1540198163009-7afda7da2945" + _UNSPLASH,
        "tier": "ultra-luxury",
        "amenities": ["360° Ring Views", "Private Chef", "Luxury Spa"],
    },
    {
        "name": "International Space Hub",
        "location": "Earth Orbit, Equatorial",
        "description": "Modern space station accommodations with scientific facilities access.",
        "price_per_night": 18000,
        "image": "https://images.unsplash.com/photo-1465101162946-4377e57745c3" + _UNSPLASH,
        "tier": "standard",
        "amenities": ["Zero-G Gym", "Science Lab Access", "Observatory"],
    },
]


WELCOME_MESSAGE = (
    "Welcome to Dubai to the Stars AI Travel Assistant! I'm your interplanetary travel advisor. "
    "Ask me about destinations, travel options, or package recommendations. "
    "How can I help you plan your space adventure today?"
)
