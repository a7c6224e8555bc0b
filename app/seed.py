"""샘플 데이터 시드.

`python -m app.seed`로 테이블을 생성하고 샘플 여행지 5곳과 Barcelona 하위 데이터를 적재합니다.
이미 여행지가 있으면 아무것도 하지 않습니다.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

from sqlalchemy.orm import Session, sessionmaker

from app.core.logger import get_logger
from app.core.logging_config import configure_logging
from app.database import get_engine, get_session_local
from app.models import (
    Base,
    Destination,
    DestinationGuide,
    InspirationContent,
    ItineraryTemplate,
    PointOfInterest,
    SeasonalEvent,
    TravelerPreference,
)

logger = get_logger(__name__)

SAMPLE_PASSENGER_ID = "7d1f3a52-4c1e-4b8e-9a0f-2f6c1d9e8b31"

_DESTINATIONS = [
    {
        "city": "Barcelona",
        "country": "Spain",
        "airport_code": "BCN",
        "region": "Catalonia",
        "continent": "Europe",
        "destination_type": ["CULTURAL", "BEACH", "FAMILY"],
        "best_time_to_visit": {
            "months": ["April", "May", "June", "September", "October"],
            "weather": "Mild and sunny",
            "events": ["La Mercè Festival", "Primavera Sound"],
        },
        "average_temp_celsius": {
            "jan": 13, "feb": 14, "mar": 16, "apr": 18, "may": 21, "jun": 25,
            "jul": 28, "aug": 28, "sep": 25, "oct": 21, "nov": 16, "dec": 14,
        },
        "languages_spoken": ["Spanish", "Catalan", "English"],
        "currency": "EUR",
        "timezone": "Europe/Madrid",
        "safety_rating": 4.2,
        "tourist_infrastructure_rating": 4.8,
        "budget_level": "MODERATE",
        "average_daily_cost_usd": 120.0,
        "popular_activities": ["Beach", "Architecture", "Museums", "Food Tours", "Shopping"],
        "famous_attractions": ["Sagrada Familia", "Park Güell", "Las Ramblas", "Gothic Quarter", "Casa Batlló"],
        "local_cuisine_highlights": ["Paella", "Tapas", "Crema Catalana", "Pan con Tomate"],
        "short_description": (
            "Vibrant Mediterranean city known for Gaudí architecture, beaches, and incredible food scene"
        ),
        "long_description": (
            "Barcelona combines stunning architecture, Mediterranean beaches, world-class museums, and a "
            "thriving culinary scene. From the whimsical designs of Antoni Gaudí to the medieval streets of "
            "the Gothic Quarter, Barcelona offers endless discoveries."
        ),
        "hero_image_url": "https://images.unsplash.com/photo-1583422409516-2895a77efded",
    },
    {
        "city": "Tokyo",
        "country": "Japan",
        "airport_code": "NRT",
        "region": "Kanto",
        "continent": "Asia",
        "destination_type": ["CULTURAL", "LUXURY", "FAMILY"],
        "best_time_to_visit": {
            "months": ["March", "April", "May", "October", "November"],
            "weather": "Pleasant temperatures",
            "events": ["Cherry Blossom Season", "Autumn Foliage"],
        },
        "average_temp_celsius": {
            "jan": 6, "feb": 7, "mar": 11, "apr": 16, "may": 20, "jun": 23,
            "jul": 27, "aug": 28, "sep": 24, "oct": 18, "nov": 13, "dec": 8,
        },
        "languages_spoken": ["Japanese", "English"],
        "currency": "JPY",
        "timezone": "Asia/Tokyo",
        "safety_rating": 4.9,
        "tourist_infrastructure_rating": 5.0,
        "budget_level": "MODERATE",
        "average_daily_cost_usd": 150.0,
        "popular_activities": ["Temples", "Shopping", "Food Tours", "Technology", "Anime"],
        "famous_attractions": ["Senso-ji Temple", "Tokyo Skytree", "Shibuya Crossing", "Meiji Shrine", "Tsukiji Market"],
        "local_cuisine_highlights": ["Sushi", "Ramen", "Tempura", "Wagyu Beef", "Matcha Desserts"],
        "short_description": "Ultra-modern metropolis blending ancient traditions with cutting-edge technology",
        "long_description": (
            "Tokyo is a fascinating blend of ancient tradition and modern innovation. Explore serene temples "
            "alongside neon-lit skyscrapers, savor world-renowned cuisine, and experience the incredible "
            "efficiency and politeness of Japanese culture."
        ),
        "hero_image_url": "https://images.unsplash.com/photo-1540959733332-eab4deabeeaf",
    },
    {
        "city": "Dubai",
        "country": "United Arab Emirates",
        "airport_code": "DXB",
        "region": "Dubai Emirate",
        "continent": "Asia",
        "destination_type": ["LUXURY", "SHOPPING", "BEACH", "FAMILY"],
        "best_time_to_visit": {
            "months": ["November", "December", "January", "February", "March"],
            "weather": "Warm and dry",
            "events": ["Dubai Shopping Festival", "Dubai Food Festival"],
        },
        "average_temp_celsius": {
            "jan": 20, "feb": 21, "mar": 24, "apr": 28, "may": 32, "jun": 35,
            "jul": 37, "aug": 38, "sep": 35, "oct": 31, "nov": 26, "dec": 22,
        },
        "languages_spoken": ["Arabic", "English", "Hindi", "Urdu"],
        "currency": "AED",
        "timezone": "Asia/Dubai",
        "safety_rating": 4.6,
        "tourist_infrastructure_rating": 5.0,
        "budget_level": "LUXURY",
        "average_daily_cost_usd": 200.0,
        "popular_activities": ["Shopping", "Desert Safari", "Beach", "Skyscrapers", "Fine Dining"],
        "famous_attractions": ["Burj Khalifa", "Dubai Mall", "Palm Jumeirah", "Dubai Marina", "Gold Souk"],
        "local_cuisine_highlights": ["Shawarma", "Hummus", "Arabic Coffee", "Kunafa", "Mixed Grill"],
        "short_description": (
            "Futuristic city of superlatives with luxury shopping, modern architecture, and desert adventures"
        ),
        "long_description": (
            "Dubai is a city of world records and architectural marvels. Experience the tallest building, "
            "largest mall, and most luxurious hotels. Combine urban luxury with desert safaris and pristine "
            "beaches for an unforgettable experience."
        ),
        "hero_image_url": "https://images.unsplash.com/photo-1512453979798-5ea266f8880c",
    },
    {
        "city": "Panama City",
        "country": "Panama",
        "airport_code": "PTY",
        "region": "Panama Province",
        "continent": "Central America",
        "destination_type": ["CULTURAL", "BEACH", "ADVENTURE"],
        "best_time_to_visit": {
            "months": ["December", "January", "February", "March", "April"],
            "weather": "Dry season",
            "events": ["Carnival", "Jazz Festival"],
        },
        "average_temp_celsius": {
            "jan": 27, "feb": 27, "mar": 28, "apr": 28, "may": 27, "jun": 27,
            "jul": 27, "aug": 27, "sep": 27, "oct": 26, "nov": 26, "dec": 27,
        },
        "languages_spoken": ["Spanish", "English"],
        "currency": "USD",
        "timezone": "America/Panama",
        "safety_rating": 4.0,
        "tourist_infrastructure_rating": 4.3,
        "budget_level": "MODERATE",
        "average_daily_cost_usd": 100.0,
        "popular_activities": ["Canal Tour", "Old Town", "Island Hopping", "Rainforest", "Beaches"],
        "famous_attractions": [
            "Panama Canal", "Casco Viejo", "Biomuseo", "Miraflores Locks", "Metropolitan Natural Park",
        ],
        "local_cuisine_highlights": ["Ceviche", "Sancocho", "Ropa Vieja", "Hojaldras", "Raspao"],
        "short_description": "Cosmopolitan hub connecting two oceans with rich history and modern skyline",
        "long_description": (
            "Panama City offers a unique blend of old and new. Explore the historic Casco Viejo, marvel at the "
            "engineering wonder of the Panama Canal, and enjoy a cosmopolitan city with excellent dining and "
            "nightlife."
        ),
        "hero_image_url": "https://images.unsplash.com/photo-1582737989364-2eef72a4f88b",
    },
    {
        "city": "Cartagena",
        "country": "Colombia",
        "airport_code": "CTG",
        "region": "Bolivar",
        "continent": "South America",
        "destination_type": ["CULTURAL", "BEACH", "ROMANTIC"],
        "best_time_to_visit": {
            "months": ["December", "January", "February", "March"],
            "weather": "Dry and warm",
            "events": ["Cartagena Film Festival", "Independence Day"],
        },
        "average_temp_celsius": {
            "jan": 27, "feb": 27, "mar": 28, "apr": 28, "may": 28, "jun": 28,
            "jul": 28, "aug": 28, "sep": 28, "oct": 27, "nov": 27, "dec": 27,
        },
        "languages_spoken": ["Spanish", "English"],
        "currency": "COP",
        "timezone": "America/Bogota",
        "safety_rating": 3.8,
        "tourist_infrastructure_rating": 4.0,
        "budget_level": "MODERATE",
        "average_daily_cost_usd": 80.0,
        "popular_activities": ["Historic Sites", "Beach", "Food Tours", "Salsa Dancing", "Island Hopping"],
        "famous_attractions": ["Walled City", "Castillo San Felipe", "Rosario Islands", "Getsemani", "Las Bovedas"],
        "local_cuisine_highlights": ["Arepas", "Bandeja Paisa", "Ceviche", "Empanadas", "Tropical Fruits"],
        "short_description": "Colonial gem with colorful streets, Caribbean beaches, and vibrant culture",
        "long_description": (
            "Cartagena enchants visitors with its perfectly preserved colonial architecture, vibrant street "
            "life, and Caribbean charm. Wander colorful streets, relax on nearby beaches, and immerse yourself "
            "in Colombian culture and cuisine."
        ),
        "hero_image_url": "https://images.unsplash.com/photo-1568632234157-ce7aecd03d0d",
    },
]

_BARCELONA_POIS = [
    {
        "name": "Sagrada Familia",
        "poi_type": "ATTRACTION",
        "category": ["ARCHITECTURE", "RELIGIOUS", "LANDMARK"],
        "description": (
            "Antoni Gaudí's unfinished masterpiece, a UNESCO World Heritage Site and Barcelona's most iconic landmark"
        ),
        "latitude": 41.4036,
        "longitude": 2.1744,
        "rating": 4.7,
        "review_count": 125000,
        "price_level": "$$",
        "visit_duration_minutes": 120,
        "is_must_see": True,
        "tags": ["Gaudi", "Architecture", "Must-See", "UNESCO"],
    },
    {
        "name": "Park Güell",
        "poi_type": "ATTRACTION",
        "category": ["PARK", "ARCHITECTURE", "VIEWPOINT"],
        "description": "Whimsical public park with colorful mosaics and stunning city views",
        "latitude": 41.4145,
        "longitude": 2.1527,
        "rating": 4.6,
        "review_count": 98000,
        "price_level": "$$",
        "visit_duration_minutes": 90,
        "is_must_see": True,
        "tags": ["Gaudi", "Park", "Photography", "Views"],
    },
    {
        "name": "La Boqueria Market",
        "poi_type": "ATTRACTION",
        "category": ["MARKET", "FOOD"],
        "description": "Famous food market on Las Ramblas offering fresh produce, seafood, and tapas",
        "latitude": 41.3818,
        "longitude": 2.1713,
        "rating": 4.5,
        "review_count": 75000,
        "price_level": "$$",
        "visit_duration_minutes": 60,
        "is_must_see": True,
        "tags": ["Food", "Market", "Local Culture"],
    },
    {
        "name": "Tickets Bar",
        "poi_type": "RESTAURANT",
        "category": ["TAPAS", "FINE DINING"],
        "description": "Innovative tapas restaurant by renowned chef Albert Adrià",
        "latitude": 41.3789,
        "longitude": 2.1500,
        "rating": 4.8,
        "review_count": 12000,
        "price_level": "$$$$",
        "visit_duration_minutes": 120,
        "is_must_see": False,
        "tags": ["Fine Dining", "Tapas", "Michelin"],
    },
]


def _slot(activity: str, duration: str, tips: str, location: str = "Barcelona") -> dict:
    return {"activity": activity, "location": location, "duration": duration, "why_this": "", "tips": [tips]}


_BARCELONA_SCHEDULE = [
    {
        "day": 1,
        "theme": "Gaudí & Gothic Quarter",
        "morning": _slot("Visit Sagrada Familia", "2 hours", "Book tickets online in advance"),
        "afternoon": _slot("Explore Gothic Quarter", "3 hours", "Get lost in the medieval streets"),
        "evening": _slot("Tapas dinner in El Born", "2 hours", "Try multiple small plates"),
        "meals": {"breakfast": "Café in Eixample", "lunch": "Tapas", "dinner": "Tapas bar in El Born"},
        "estimated_cost": 300,
        "walking_distance_km": 7,
    },
    {
        "day": 2,
        "theme": "Modernist Architecture & Beach",
        "morning": _slot("Park Güell visit", "2 hours", "Arrive early for best photos"),
        "afternoon": _slot("Barceloneta Beach & lunch", "4 hours", "Try fresh seafood by the beach"),
        "evening": _slot("Magic Fountain show at Montjuïc", "1.5 hours", "Free show on select evenings"),
        "meals": {"breakfast": "Hotel", "lunch": "Paella by the beach", "dinner": "Montjuïc restaurant"},
        "estimated_cost": 300,
        "walking_distance_km": 8,
    },
    {
        "day": 3,
        "theme": "Markets & Modernism",
        "morning": _slot("La Boqueria Market", "1.5 hours", "Perfect for breakfast and shopping"),
        "afternoon": _slot(
            "Casa Batlló & Passeig de Gràcia shopping", "3 hours", "Audio guide highly recommended"
        ),
        "evening": _slot("Farewell dinner with city views", "2 hours", "Book rooftop restaurant in advance"),
        "meals": {"breakfast": "La Boqueria stalls", "lunch": "Pan con Tomate", "dinner": "Rooftop restaurant"},
        "estimated_cost": 300,
        "walking_distance_km": 6,
    },
]

_BARCELONA_GUIDE_CONTENT = """# Must-Do Experiences in Barcelona

Barcelona offers an incredible variety of experiences that blend culture, cuisine, and coastal beauty. \
Here are the absolute must-do activities:

## 1. Marvel at Sagrada Familia
Gaudí's masterpiece has been under construction since 1882 and remains breathtaking.

## 2. Wander Park Güell
This whimsical park showcases Gaudí's unique vision with colorful mosaics and organic architecture.

## 3. Explore Gothic Quarter
Get lost in the labyrinth of medieval streets, discovering hidden plazas and ancient Roman walls.

## 4. Relax at Barceloneta Beach
Enjoy 4.5km of sandy beaches right in the city.

## 5. Experience La Boqueria Market
This famous market is a feast for the senses with vibrant produce, fresh seafood, and delicious tapas.
"""

_BARCELONA_ARTICLE = """Barcelona is the perfect destination for a quick European escape. With its unique blend of \
architectural wonders, beachside charm, and incredible food scene, you can pack an unforgettable experience \
into just one weekend.

Start your Saturday morning at the iconic Sagrada Familia, arriving early to beat the crowds. From there, \
take a leisurely stroll through the Eixample district to admire more Modernist architecture.

The afternoon is perfect for exploring the Gothic Quarter, where narrow medieval streets open onto charming \
plazas. Stop for lunch at a traditional tapas bar and try pan con tomate and patatas bravas.

Sunday morning calls for a visit to Park Güell, then spend your afternoon at La Boqueria market. Barcelona \
will leave you planning your return before you even depart."""


def _seed_barcelona(session: Session, barcelona: Destination) -> None:
    for poi in _BARCELONA_POIS:
        session.add(PointOfInterest(destination_id=barcelona.id, **poi))

    session.add(
        ItineraryTemplate(
            destination_id=barcelona.id,
            template_name="Barcelona Highlights: Culture & Beach",
            duration_days=3,
            trip_style="BALANCED",
            target_audience="COUPLES",
            daily_schedule=_BARCELONA_SCHEDULE,
            estimated_cost_usd=900.0,
            difficulty_level="EASY",
            must_do_activities=["Sagrada Familia", "Park Güell", "Gothic Quarter", "Beach Time"],
            packing_list=["Comfortable walking shoes", "Swimwear", "Sunscreen", "Light jacket for evenings"],
            is_featured=True,
        )
    )
    session.add(
        DestinationGuide(
            destination_id=barcelona.id,
            guide_type="THINGS_TO_DO",
            title="Top 10 Experiences in Barcelona",
            content=_BARCELONA_GUIDE_CONTENT,
            highlights=["Gaudí architecture", "Beach life", "Gothic history", "Culinary excellence", "Vibrant nightlife"],
            tips=[
                "Purchase skip-the-line tickets for major attractions",
                "Use the metro - it's efficient and affordable",
                "Avoid eating on Las Ramblas - touristy and overpriced",
                "Learn a few Spanish phrases - locals appreciate it",
                "Restaurants open late - dinner starts around 9 PM",
            ],
            author="AI",
        )
    )
    session.add_all(
        [
            SeasonalEvent(
                destination_id=barcelona.id,
                event_name="La Mercè Festival",
                event_type="FESTIVAL",
                start_date=date(2025, 9, 24),
                end_date=date(2025, 9, 27),
                description=(
                    "Barcelona's biggest street festival celebrating the city's patron saint "
                    "with concerts, parades, and fireworks"
                ),
                expected_crowd_level="VERY_HIGH",
                relevance_score=0.95,
            ),
            SeasonalEvent(
                destination_id=barcelona.id,
                event_name="Primavera Sound",
                event_type="CONCERT",
                start_date=date(2025, 5, 28),
                end_date=date(2025, 6, 1),
                description=(
                    "One of Europe's premier music festivals featuring international artists across multiple genres"
                ),
                expected_crowd_level="HIGH",
                relevance_score=0.85,
            ),
        ]
    )
    session.add(
        InspirationContent(
            content_type="ARTICLE",
            title="48 Hours in Barcelona: The Perfect Weekend Getaway",
            subtitle="Discover Gaudí's masterpieces, savor world-class tapas, and soak up the Mediterranean sun",
            destination_id=barcelona.id,
            theme="CULTURAL",
            content=_BARCELONA_ARTICLE,
            call_to_action="Book your Barcelona weekend escape today - packages from $799",
            target_audience=["CITY_BREAK", "WEEKEND", "CULTURAL"],
            published_at=datetime.now(timezone.utc),
        )
    )


def seed_sample_data(session_factory: sessionmaker[Session]) -> bool:
    """샘플 데이터를 적재합니다. 이미 여행지가 있으면 건너뛰고 False를 반환합니다."""
    with session_factory() as session:
        if session.query(Destination.id).first() is not None:
            logger.info("시드 건너뜀: 여행지 데이터가 이미 존재합니다.")
            return False

        destinations = {data["city"]: Destination(**data) for data in _DESTINATIONS}
        session.add_all(destinations.values())
        session.flush()

        _seed_barcelona(session, destinations["Barcelona"])
        session.add(
            TravelerPreference(
                passenger_id=SAMPLE_PASSENGER_ID,
                travel_style="CULTURAL",
                preferred_activities=["Museums", "Food Tours", "Walking Tours", "Photography"],
                interests=["HISTORY", "FOOD", "ARCHITECTURE", "PHOTOGRAPHY"],
                travel_companions="COUPLE",
                budget_preference="MODERATE",
                typical_trip_duration=7,
                pace_preference="MODERATE",
            )
        )
        session.commit()

    logger.info("시드 완료: 여행지 %d곳", len(_DESTINATIONS))
    return True


def main() -> None:
    """테이블을 생성하고 샘플 데이터를 적재합니다."""
    configure_logging()
    Base.metadata.create_all(bind=get_engine())
    seed_sample_data(get_session_local())


if __name__ == "__main__":
    main()
