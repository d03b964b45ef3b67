"""
Offline fixture for URLs carrying a demo token.

Returns the same five complete listings on every call, so manual checks and integration tests never
depend on a live third-party site.
"""

from .config import DEMO_TOKENS
from .models import Listing

DEMO_SOURCE = "demo"


def is_demo_url(url: str | None) -> bool:
    u = (url or "").lower()
    return any(token in u for token in DEMO_TOKENS)


def demo_listings() -> list[Listing]:
    """Five fixed listings; a fresh list of fresh objects each call."""
    return [
        Listing(
            title="2019 Maruti Suzuki Swift VXI",
            model="Swift VXI",
            price=550000,
            year_of_purchase=2019,
            images=[
                "https://images.unsplash.com/photo-1549399542-7e3f8b79c341?w=800",
                "https://images.unsplash.com/photo-1552519507-da3b142c6e3d?w=800",
            ],
            owner_name="Rajesh Kumar",
            distance_driven=35000,
            ownership_count=1,
            city="Mumbai",
            description="Single owner, company serviced, all records available.",
            source=DEMO_SOURCE,
            fuel_type="Petrol",
            transmission="Manual",
        ),
        Listing(
            title="2018 Hyundai Creta SX",
            model="Creta SX",
            price=1125000,
            year_of_purchase=2018,
            images=[
                "https://images.unsplash.com/photo-1533473359331-0135ef1b58bf?w=800",
                "https://images.unsplash.com/photo-1494976388531-d1058494cdd8?w=800",
            ],
            owner_name="Priya Sharma",
            distance_driven=52000,
            ownership_count=2,
            city="Bangalore",
            description="Second owner, sunroof, new tyres fitted last year.",
            source=DEMO_SOURCE,
            fuel_type="Diesel",
            transmission="Manual",
        ),
        Listing(
            title="2020 Honda City ZX CVT",
            model="City ZX CVT",
            price=1250000,
            year_of_purchase=2020,
            images=[
                "https://images.unsplash.com/photo-1503376780353-7e6692767b70?w=800",
            ],
            owner_name="Amit Patel",
            distance_driven=28000,
            ownership_count=1,
            city="Delhi",
            description="Automatic, extended warranty till 2025, no accidents.",
            source=DEMO_SOURCE,
            fuel_type="Petrol",
            transmission="Automatic",
        ),
        Listing(
            title="2017 Toyota Innova Crysta 2.4 GX",
            model="Innova Crysta 2.4 GX",
            price=1575000,
            year_of_purchase=2017,
            images=[
                "https://images.unsplash.com/photo-1542362567-b07e54358753?w=800",
                "https://images.unsplash.com/photo-1511919884226-fd3cad34687c?w=800",
            ],
            owner_name="Suresh Reddy",
            distance_driven=88000,
            ownership_count=2,
            city="Hyderabad",
            description="7 seater, well maintained, highway driven.",
            source=DEMO_SOURCE,
            fuel_type="Diesel",
            transmission="Manual",
        ),
        Listing(
            title="2021 Tata Nexon XZ Plus",
            model="Nexon XZ Plus",
            price=925000,
            year_of_purchase=2021,
            images=[
                "https://images.unsplash.com/photo-1580273916550-e323be2ae537?w=800",
            ],
            owner_name="Neha Gupta",
            distance_driven=18500,
            ownership_count=1,
            city="Pune",
            description="5 star safety rating, touchscreen infotainment, under warranty.",
            source=DEMO_SOURCE,
            fuel_type="Petrol",
            transmission="Manual",
        ),
    ]
