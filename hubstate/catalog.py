"""Built-in service catalog records.

Each release of built-in services is kept as its own tuple so the
migration that introduced it can inject exactly that release, and the
baseline can draw its default catalog from the same records.

Records carry the timestamp of their release rather than the time of
injection, so every migration step is a deterministic function of its
input.
"""

from copy import deepcopy
from typing import Any, Dict, List, Optional, Sequence, Tuple

ServiceRecord = Dict[str, Any]


def make_service(
    service_id: str,
    name: str,
    category: str,
    description: str,
    base_price: float,
    pricing_type: str,
    released_at: str,
    key_features: Optional[Sequence[str]] = None,
    menu_options: Optional[Sequence[str]] = None,
    display_price: Optional[bool] = True,
) -> ServiceRecord:
    """Build a catalog record in the stored (camelCase) shape."""
    record: ServiceRecord = {
        "id": service_id,
        "name": name,
        "category": category,
        "description": description,
        "basePrice": base_price,
        "pricingType": pricing_type,
        "status": "Active",
        "createdAt": released_at,
        "lastModifiedAt": released_at,
    }
    if key_features is not None:
        record["keyFeatures"] = list(key_features)
    if menu_options is not None:
        record["menuOptions"] = list(menu_options)
    if display_price is not None:
        record["displayPrice"] = display_price
    return record


def _release(released_at: str, rows: Sequence[tuple]) -> Tuple[ServiceRecord, ...]:
    return tuple(make_service(*row[:6], released_at, *row[6:]) for row in rows)


def copy_records(records: Sequence[ServiceRecord]) -> List[ServiceRecord]:
    """Deep copies, so callers can never mutate the module-level tuples."""
    return [deepcopy(r) for r in records]


# Granular services retired when the high-level master list replaced them
RETIRED_SERVICE_IDS = frozenset(
    {"s-print-1", "s-print-2", "s-av-1", "s-av-2", "s-ent-1", "s-ent-2"}
)

CATERING_MENU_RELEASE = "2024-09-01T00:00:00.000Z"
VENUE_RELEASE = "2024-10-01T00:00:00.000Z"
EXPANSION_RELEASE = "2024-11-01T00:00:00.000Z"
PARTNER_RELEASE = "2025-01-15T00:00:00.000Z"
CORE_RELEASE = "2024-06-01T00:00:00.000Z"

# (id, name, category, description, basePrice, pricingType, keyFeatures, menuOptions, displayPrice)
CATERING_MENU_SERVICES = _release(
    CATERING_MENU_RELEASE,
    [
        (
            "s-mig-10-1", "Morning Breakfast Buffet (VIP)", "Catering",
            "Comprehensive breakfast spread including bread display, croissants, rustic bites, "
            "mini manakish, foul & balila, hot display (grilled vegetables, halloumi), pancakes, "
            "waffles, and beverages.",
            180, "Per Person",
            ["Live Station", "International Selection", "Beverages Included"],
            ["Assortment of croissants", "Rustic Bites", "Mini manakish", "Foul & balila",
             "Grilled Halloumi", "Pancakes", "Cheese kunafa"],
        ),
        (
            "s-mig-10-2", "Coffee Break (AM - Option A)", "Catering",
            "Premium morning refreshment break. Includes bread display, croissants, rustic bites, "
            "english cake, cookies, pancakes, yogurt jars, fruit display, and full beverage station.",
            120, "Per Person",
            ["Premium Selection", "3 Hour Duration"],
            ["Bread Display", "Croissants", "Rustic Bites", "English Cake", "Pancakes",
             "Yogurt Jars", "Fresh Juices"],
        ),
        (
            "s-mig-10-3", "Coffee Break (AM - Option B)", "Catering",
            "Standard morning break featuring rustic bites, croissants, mini manakish, english "
            "cake, cookies, yogurt jars, fruit cuts, and beverages.",
            100, "Per Person",
            ["Standard Selection", "3 Hour Duration"],
            ["Rustic Bites", "Croissants", "Mini Manakish", "English Cake", "Cookies",
             "Yogurt Jars", "Fresh Juices"],
        ),
        (
            "s-mig-10-4", "Coffee Break (AM - Option C)", "Catering",
            "Essential morning break with croissants, mini manakish, english cake, cookies, "
            "fruit cuts, and beverages.",
            80, "Per Person",
            ["Essential Selection", "3 Hour Duration"],
            ["Croissants", "Mini Manakish", "English Cake", "Cookies", "Fruit Cuts",
             "Fresh Juices"],
        ),
        (
            "s-mig-10-5", "Coffee Break (PM - Option A)", "Catering",
            "Premium afternoon break featuring brioche buns, club sandwiches, dips, mini gateaux, "
            "eclairs, tarts, verrines, brownies, fruit, and beverages.",
            120, "Per Person",
            ["Premium Sweets", "Savory Selection", "3 Hour Duration"],
            ["Brioche Buns", "Club Sandwiches", "Mini Gateaux", "Eclairs", "Tarts", "Brownies",
             "Fresh Juices"],
        ),
        (
            "s-mig-10-6", "Coffee Break (PM - Option B)", "Catering",
            "Standard afternoon break with club sandwiches, dips, eclairs, tarts, verrines, "
            "brownies, fruit, and beverages.",
            100, "Per Person",
            ["Standard Sweets", "Savory Selection", "3 Hour Duration"],
            ["Club Sandwiches", "Vegetable Shooters", "Eclairs", "Tarts", "Brownies",
             "Fresh Juices"],
        ),
        (
            "s-mig-10-7", "Coffee Break (PM - Option C)", "Catering",
            "Essential afternoon break including club sandwiches, dips, eclairs, verrines, "
            "fruit, and beverages.",
            80, "Per Person",
            ["Essential Sweets", "3 Hour Duration"],
            ["Club Sandwiches", "Vegetable Shooters", "Eclairs", "Verrines", "Fresh Juices"],
        ),
        (
            "s-mig-10-8", "International Buffet (Option A)", "Catering",
            "Full international and oriental buffet. Includes cold appetizers, salads, hot "
            "appetizers (fatayer, spring rolls), main courses (hamour, butter chicken, lamb "
            "kabsa, pasta), and assorted desserts.",
            0, "Per Person",  # On request
            ["Multi-Cuisine", "Hot & Cold Appetizers", "Dessert Station"],
            ["Hummus", "Vine Leaves", "Tabbouleh", "Caesar Salad", "Spinach Fatayer",
             "Baked Hamour", "Butter Chicken", "Lamb Kabsa", "Cheesecake"],
            False,
        ),
        (
            "s-mig-10-9", "High Tea Menu (Mini Sandwiches)", "Catering",
            "Elegant high tea selection with mini sandwiches (salami, chicken roulade), hot "
            "bites (falafel, halloumi), bakery items, and desserts.",
            0, "Per Person",  # On request
            ["Finger Foods", "Elegant Presentation"],
            ["Italian Beef Salami", "Chicken Roulade", "Falafel Wrap", "Halloumi Wrap",
             "Mix Croissant", "Um Ali", "Donuts"],
            False,
        ),
        (
            "s-mig-10-10", "Continental Lunch/Dinner", "Catering",
            "Continental menu featuring starters (hummus, caesar salad), main courses (mixed "
            "grill, beef stroganoff, biryani), and desserts.",
            0, "Per Person",  # On request
            ["Continental Classics", "Buffet Style"],
            ["Chicken Caesar Salad", "Fried Cauliflower", "Oriental Mixed Grill",
             "Beef Stroganoff", "Chicken Biryani", "Pasta Bechamel", "Chocolate Cake"],
            False,
        ),
    ],
)

VENUE_SERVICES = _release(
    VENUE_RELEASE,
    [
        (
            "s-ven-001", "Venue Rental", "Venue",
            "Exclusive rental of our main ballroom with seating for up to 300 guests.",
            5000, "Flat Fee",
            ["300 Guests Capacity", "Ballroom", "Exclusive Use"],
        ),
    ],
)

EXPANSION_SERVICES = _release(
    EXPANSION_RELEASE,
    [
        (
            "s-av-003", "Projector & Screen Package", "AV & Lighting",
            "High-lumen projector with a portable 100-inch screen. Ideal for breakout rooms.",
            800, "Flat Fee", ["Full HD", "HDMI/VGA", "Portable"],
        ),
        (
            "s-av-004", "Stage Lighting Kit (Moving Heads)", "AV & Lighting",
            "Set of 4 moving head wash lights and 4 par cans to create dynamic stage atmosphere.",
            2000, "Flat Fee", ["Dynamic Colors", "DMX Control", "Setup Included"],
        ),
        (
            "s-dec-002", "Custom Event Backdrop (3m x 2.4m)", "Decor & Styling",
            "Printed backdrop with custom branding or thematic design. Includes stand installation.",
            1200, "Flat Fee", ["Custom Print", "Photo Op", "Branding"],
        ),
        (
            "s-dec-003", "Luxury Table Setting", "Decor & Styling",
            "Premium charger plates, napkin rings, and fine cutlery setup per seat.",
            25, "Per Person", ["Gold/Silver Options", "Elegant", "Full Set"],
        ),
        (
            "s-stf-002", "Security Guard (8 Hours)", "Staffing",
            "Licensed security personnel for event safety and access control.",
            500, "Per Unit", ["Uniformed", "Access Control", "Safety"],
        ),
        (
            "s-stf-003", "Event Coordinator (On-site)", "Staffing",
            "Dedicated coordinator to manage vendors and timeline on the event day.",
            1500, "Flat Fee", ["Timeline Management", "Vendor POC", "Problem Solving"],
        ),
        (
            "s-photo-2", "Cinematic Videography", "Photography",
            "Full day video coverage with edited highlight reel (3-5 mins) and full ceremony footage.",
            4500, "Flat Fee", ["4K Quality", "Drone Shots", "Professional Editing"],
        ),
        (
            "s-log-002", "Luxury Chauffeur Service (10 Hours)", "Logistics",
            "Premium sedan with professional driver for VIP transport.",
            1200, "Flat Fee", ["Luxury Sedan", "Professional Driver", "Fuel Included"],
        ),
    ],
)

_LAMB = (
    "Magnificent, perfectly roasted Naimi Lambs, serving as a captivating centerpiece that "
    "delivers exceptional tenderness, rich authentic flavors, and generous portions. "
    "Quantity: 2 units."
)

PARTNER_SERVICES = _release(
    PARTNER_RELEASE,
    [
        # Elitepro
        ("s-ep-001", "Large Naimi Lambs (18-20kg each) - Option A", "Catering", _LAMB,
         3000, "Per Unit", ["Roasted Whole", "Authentic Flavor", "Centerpiece"]),
        ("s-ep-002", "Large Naimi Lambs (18-20kg each) - Option B", "Catering", _LAMB,
         2650, "Per Unit", ["Roasted Whole", "Authentic Flavor", "Centerpiece"]),
        ("s-ep-003", "Pre-plated Mixed Salad", "Catering",
         "Meticulously crafted, pre-plated mixed salad, offering a vibrant and refreshing start "
         "served with exquisite presentation.",
         40, "Per Unit", ["Pre-plated", "Fresh Vegetables", "Exquisite Presentation"]),
        ("s-ep-004", "Coffee & Tea Service", "Catering",
         "Full service for coffee and tea selection.",
         1550, "Flat Fee", ["Full Service", "Coffee Selection", "Tea Selection"]),
        ("s-ep-005", "Bottled Water (Small)", "Catering",
         "Easily accessible, individual bottled water, providing essential refreshment.",
         100, "Per Unit", ["Individual Bottles", "Essential Refreshment"]),
        ("s-ep-006", "Saudi Traditional Tent 6 M x 12 M", "Event Tent",
         "Saudi Traditional Tent 6 M x 12 M.",
         4500, "Per Unit", ["Traditional Style", "Large Capacity", "6x12 Meters"]),
        ("s-ep-007", "Event Tent", "Event Tent", "Standard Event Tent.",
         3500, "Per Unit", ["Standard Tent", "Event Coverage"]),
        ("s-ep-008", "Disposable Cutlery/Plates/Napkins", "Catering Supplies",
         "Disposable Cutlery, Plates, and Napkins.",
         10, "Per Unit", ["Disposable", "Complete Set"]),
        ("s-ep-009", "Chair Covers", "Furniture Rental", "Elegant Chair Covers.",
         12, "Per Unit", ["Elegant Design", "Various Colors"]),
        ("s-ep-010", "Table Covers", "Furniture Rental", "Premium Table Covers.",
         12, "Per Unit", ["Premium Quality", "Various Sizes"]),
        ("s-ep-011", "Table Covers (Games tables)", "Furniture Rental",
         "Table Covers specifically for Games tables.",
         15, "Per Unit", ["Games Table Fit", "Durable Material"]),
        ("s-ep-012", "Dining Chairs Rental", "Furniture Rental", "Rental of Dining Chairs.",
         15, "Per Unit", ["Comfortable", "Event Style"]),
        ("s-ep-013", "Dining Round Tables", "Furniture Rental", "Rental of Round Dining Tables.",
         90, "Per Unit", ["Round Shape", "Dining Capacity"]),
        ("s-ep-014", "Service/Buffet Tables", "Furniture Rental",
         "Rental of Service or Buffet Tables.",
         90, "Per Unit", ["Rectangular/Round", "Sturdy"]),
        ("s-ep-015", "Delivery, Setup & Dismantling Fee", "Logistics",
         "Comprehensive fee for delivery, setup, and dismantling of event equipment.",
         600, "Per Unit", ["Full Service", "Logistics Handling"]),
        ("s-ep-016", "Coordination & Event Management Fee", "Management",
         "Fee for event coordination and management services.",
         350, "Per Unit", ["Professional Coordination", "On-site Management"]),
        ("s-ep-017", "Service Staff (4 people, 8 hours)", "Staffing",
         "Team of 4 service staff members for an 8-hour shift.",
         350, "Per Unit", ["Professional Staff", "8 Hour Shift", "Team of 4"]),
        ("s-ep-018", "VIP Travel Package Upgrade", "Travel", "Upgrade to VIP Travel Package.",
         350, "Per Unit", ["VIP Status", "Travel Upgrade"]),
        # Carlton Al Moaibed Hotel
        ("s-ch-001", "Lunch Buffet Option A", "Catering",
         "International Bread Selection, Cold Appetizers (Hummus, Vine Leaves, etc.), Salads "
         "(Tabbouleh, Rocca...), Hot Appetizers (Spinach Fatayer...), Main Courses (Baked "
         "Hamour, Butter Chicken...), Desserts (Cheesecake...), Beverages.",
         200, "Per Person", ["International Menu", "Comprehensive Buffet"],
         ["Hummus Beiruty", "Vine Leaves", "Tabbouleh", "Rocca Mushroom Salad",
          "Spinach Fatayer", "Baked Hamour Filet", "Butter Chicken", "Lamb Kabsa",
          "Salted Caramel Cheesecake", "Soft Drinks"]),
        ("s-ch-002", "Lunch Buffet Option B", "Catering",
         "Includes Bread Display, Hummus Tahini, Phoenician Labneh, Fattoush, Beetroot "
         "Carpaccio, Chicken Musakhan Rolls, Duo Roasted Hamour, Grilled Tenderloin, "
         "Pistachio Cheesecake, and more.",
         240, "Per Person", ["Premium Selection", "International & Oriental"],
         ["Hummus Tahini", "Phoenician Labneh", "Fattoush", "Beetroot Carpaccio",
          "Chicken Musakhan Rolls", "Duo Roasted Hamour", "Grilled Tenderloin",
          "Pistachio Cheesecake"]),
        ("s-ch-003", "Lunch Buffet Option C", "Catering",
         "Includes Trio Hummus, Raheb Eggplant, Avocado Shrimp Salad, Goat Cheese Salad, "
         "Lobster Tail Gratin, Coconut Fish Curry, Roasted Lamb, Baked Mango Cheesecake, "
         "and more.",
         300, "Per Person", ["Luxury Selection", "Seafood & Lamb Specials"],
         ["Trio Hummus", "Raheb Eggplant", "Avocado Shrimp Salad", "Lobster Tail Gratin",
          "Coconut Fish Curry", "Roasted Lamb", "Baked Mango Cheesecake"]),
        ("s-ch-004", "Morning Breakfast VIP Menu", "Catering",
         "A premium breakfast buffet for VIPs including Bread display, Croissants, Rustic "
         "Bites, Mini manakish, Cold cuts, Hot Display, Pancakes, and Fresh Juices.",
         180, "Per Person", ["VIP Breakfast", "Extensive Variety"],
         ["Bread Display", "Croissants", "Rustic Bites", "Mini Manakish", "Cold Cuts",
          "Hot Display", "Pancakes", "Fresh Juices", "Arabic Coffee"]),
        ("s-ch-005", "Refreshment", "Catering", "Standard refreshment package.",
         80, "Per Unit", ["Standard Refreshments"]),
        ("s-ch-006", "Lunch", "Catering", "Standard Lunch package.",
         200, "Per Unit", ["Standard Lunch"]),
        ("s-ch-007", "Transportation", "Logistics", "Transportation service.",
         300, "Per Unit", ["Transportation"]),
        ("s-ch-008", "Lunch + Standard Coffee Break (Option A)", "Catering Package",
         "Combined package of Lunch Buffet Option A and Standard Coffee Break.",
         240, "Per Person", ["Lunch Buffet A", "Coffee Break"]),
        ("s-ch-009", "Lunch + Standard Coffee Break (Option B)", "Catering Package",
         "Combined package of Lunch Buffet Option B and Standard Coffee Break.",
         280, "Per Person", ["Lunch Buffet B", "Coffee Break"]),
        ("s-ch-010", "Lunch + Standard Coffee Break (Option C)", "Catering Package",
         "Combined package of Lunch Buffet Option C and Standard Coffee Break.",
         340, "Per Person", ["Lunch Buffet C", "Coffee Break"]),
    ],
)

CORE_SERVICES = _release(
    CORE_RELEASE,
    [
        ("s-photo-1", "Event Photography (8 hours)", "Photography",
         "Full-day event coverage by a professional photographer. Includes edited "
         "high-resolution photos.",
         3000, "Flat Fee", None, None, None),
        ("s-av-main", "Main Stage AV Package", "AV & Lighting",
         "Complete package with large LED screen, sound system for 300 guests, and stage "
         "lighting.",
         15000, "Flat Fee", None, None, None),
    ],
)


def _pick(records: Sequence[ServiceRecord], *ids: str) -> List[ServiceRecord]:
    by_id = {r["id"]: r for r in records}
    return [by_id[i] for i in ids]


# Master services shipped with a fresh install
DEFAULT_SERVICES: Tuple[ServiceRecord, ...] = tuple(
    _pick(CATERING_MENU_SERVICES, "s-mig-10-1", "s-mig-10-2")
    + _pick(VENUE_SERVICES, "s-ven-001")
    + _pick(EXPANSION_SERVICES, "s-av-003")
    + _pick(PARTNER_SERVICES, "s-ep-001", "s-ch-001")
    + list(CORE_SERVICES)
)
