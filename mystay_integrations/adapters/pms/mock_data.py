"""
Built-in PMS dataset served by the mock provider when no mock server URL is configured.
Dates are fixed so responses are deterministic.
"""

MOCK_TODAY = "2026-01-15"

PROPERTY = {
    "id": "DEMO-PROPERTY",
    "name": "MyStay Demo Hotel",
    "code": "MSDH",
    "address": "31 Avenue George V",
    "city": "Paris",
    "country": "France",
    "timezone": "Europe/Paris",
    "currency": "EUR",
    "starRating": 5,
    "checkInTime": "15:00",
    "checkOutTime": "12:00",
}

GUESTS = {
    "GUEST-001": {
        "id": "GUEST-001",
        "firstName": "Sophie",
        "lastName": "Martin",
        "email": "sophie.martin@email.com",
        "phone": "+33 6 12 34 56 78",
        "nationality": "FR",
        "language": "fr",
        "vipStatus": "gold",
    },
    "GUEST-002": {
        "id": "GUEST-002",
        "firstName": "James",
        "lastName": "Wilson",
        "email": "james.wilson@corp.com",
        "phone": "+1 212 555 0123",
        "nationality": "US",
        "language": "en",
        "vipStatus": "platinum",
    },
    "GUEST-003": {
        "id": "GUEST-003",
        "firstName": "Yuki",
        "lastName": "Tanaka",
        "email": "yuki.tanaka@example.jp",
        "phone": "+81 90 1234 5678",
        "nationality": "JP",
        "language": "ja",
        "vipStatus": None,
    },
}

RESERVATIONS = {
    "RES-2025-0001": {
        "id": "RES-2025-0001",
        "propertyId": "DEMO-PROPERTY",
        "confirmationNumber": "FSGV2025A1B2C",
        "status": "checked_in",
        "source": "direct",
        "guestId": "GUEST-001",
        "guest": {
            "firstName": "Sophie",
            "lastName": "Martin",
            "email": "sophie.martin@email.com",
            "phone": "+33 6 12 34 56 78",
        },
        "checkInDate": "2026-01-15",
        "checkOutDate": "2026-01-18",
        "nights": 3,
        "roomType": "Suite",
        "roomNumber": "701",
        "roomRate": 1500,
        "currency": "EUR",
        "totalAmount": 4500,
        "adults": 2,
        "children": 0,
        "specialRequests": "High floor, quiet room, champagne upon arrival",
        "packages": ["breakfast", "spa-credit"],
        "checkedInAt": "2026-01-15T15:20:00Z",
        "createdAt": "2025-01-10T14:30:00Z",
    },
    "RES-2025-0002": {
        "id": "RES-2025-0002",
        "propertyId": "DEMO-PROPERTY",
        "confirmationNumber": "FSGV2025D3E4F",
        "status": "confirmed",
        "source": "booking.com",
        "guestId": "GUEST-002",
        "guest": {
            "firstName": "James",
            "lastName": "Wilson",
            "email": "james.wilson@corp.com",
            "phone": "+1 212 555 0123",
        },
        "checkInDate": "2026-01-16",
        "checkOutDate": "2026-01-19",
        "nights": 3,
        "roomType": "Junior Suite",
        "roomNumber": None,
        "roomRate": 1200,
        "currency": "EUR",
        "totalAmount": 3600,
        "adults": 1,
        "children": 0,
        "specialRequests": "Late check-in, around 23:00",
        "packages": ["breakfast"],
        "createdAt": "2025-01-02T09:15:00Z",
    },
    "RES-2025-0003": {
        "id": "RES-2025-0003",
        "propertyId": "DEMO-PROPERTY",
        "confirmationNumber": "FSGV2025G5H6I",
        "status": "checked_in",
        "source": "expedia",
        "guestId": "GUEST-003",
        "guest": {
            "firstName": "Yuki",
            "lastName": "Tanaka",
            "email": "yuki.tanaka@example.jp",
            "phone": "+81 90 1234 5678",
        },
        "checkInDate": "2026-01-13",
        "checkOutDate": "2026-01-15",
        "nights": 2,
        "roomType": "Deluxe Room",
        "roomNumber": "512",
        "roomRate": 950,
        "currency": "EUR",
        "totalAmount": 1900,
        "adults": 2,
        "children": 1,
        "specialRequests": None,
        "packages": [],
        "checkedInAt": "2026-01-13T16:05:00Z",
        "createdAt": "2025-12-20T18:40:00Z",
    },
}

FOLIOS = {
    "RES-2025-0001": {
        "reservationId": "RES-2025-0001",
        "currency": "EUR",
        "charges": [
            {"id": "CHG-001", "date": "2026-01-15", "description": "Room charge - Suite", "amount": 1500, "category": "room"},
            {"id": "CHG-002", "date": "2026-01-15", "description": "Breakfast - Le Cinq", "amount": 95, "category": "restaurant"},
            {"id": "CHG-003", "date": "2026-01-15", "description": "Mini bar", "amount": 45, "category": "minibar"},
            {"id": "CHG-004", "date": "2026-01-15", "description": "Spa - Deep tissue massage", "amount": 220, "category": "spa"},
        ],
        "payments": [
            {"id": "PAY-001", "date": "2025-01-10", "description": "Deposit", "amount": 1500, "method": "credit_card"},
        ],
        "balance": 360,
    },
    "RES-2025-0003": {
        "reservationId": "RES-2025-0003",
        "currency": "EUR",
        "charges": [
            {"id": "CHG-020", "date": "2026-01-13", "description": "Room charge - Deluxe", "amount": 950, "category": "room"},
            {"id": "CHG-021", "date": "2026-01-14", "description": "Room charge - Deluxe", "amount": 950, "category": "room"},
            {"id": "CHG-022", "date": "2026-01-14", "description": "In-room dining", "amount": 128.5, "category": "restaurant"},
        ],
        "payments": [],
        "balance": 2028.5,
    },
}

ROOMS = [
    {"id": "DEMO-701", "number": "701", "type": "Suite", "floor": 7, "status": "occupied", "maxOccupancy": 3},
    {"id": "DEMO-702", "number": "702", "type": "Suite", "floor": 7, "status": "clean", "maxOccupancy": 3},
    {"id": "DEMO-703", "number": "703", "type": "Junior Suite", "floor": 7, "status": "dirty", "maxOccupancy": 2},
    {"id": "DEMO-512", "number": "512", "type": "Deluxe Room", "floor": 5, "status": "occupied", "maxOccupancy": 3},
    {"id": "DEMO-514", "number": "514", "type": "Deluxe Room", "floor": 5, "status": "inspected", "maxOccupancy": 2},
]

MENU = {
    "id": "menu-default",
    "name": "24/7 In-Room Dining",
    "availableHours": "24/7",
    "categories": [
        {
            "id": "breakfast",
            "name": "Breakfast",
            "availableFrom": "06:30",
            "availableUntil": "11:00",
            "items": [
                {"id": "BF-001", "name": "Continental Breakfast", "price": 45, "currency": "EUR", "dietaryTags": ["vegetarian"]},
                {"id": "BF-002", "name": "American Breakfast", "price": 55, "currency": "EUR"},
                {"id": "BF-004", "name": "Eggs Benedict Royale", "price": 48, "currency": "EUR"},
            ],
        },
        {
            "id": "starters",
            "name": "Starters & Salads",
            "availableFrom": "11:00",
            "availableUntil": "23:00",
            "items": [
                {"id": "ST-001", "name": "Caesar Salad", "price": 28, "currency": "EUR"},
                {"id": "ST-003", "name": "French Onion Soup", "price": 24, "currency": "EUR"},
            ],
        },
    ],
}

SPA_SERVICES = {
    "id": "spa-default",
    "name": "Le Spa",
    "operatingHours": "08:00 - 21:00",
    "categories": [
        {
            "id": "massage",
            "name": "Massages",
            "items": [
                {"id": "SPA-001", "name": "Swedish Relaxation Massage", "duration": 60, "price": 180, "currency": "EUR"},
                {"id": "SPA-002", "name": "Deep Tissue Massage", "duration": 60, "price": 220, "currency": "EUR"},
                {"id": "SPA-003", "name": "Hot Stone Therapy", "duration": 90, "price": 280, "currency": "EUR"},
            ],
        },
        {
            "id": "facials",
            "name": "Facials",
            "items": [
                {"id": "SPA-010", "name": "Signature Facial", "duration": 60, "price": 195, "currency": "EUR"},
            ],
        },
    ],
}

SPA_PRACTITIONERS = ["Marie", "Jean", "Sophie", "Pierre"]

# Hours with no free slot in the built-in schedule
SPA_BLOCKED_HOURS = {12, 13, 17}
