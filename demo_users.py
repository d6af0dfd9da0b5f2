"""
Demo users for Taskhub
One account per role plus a few extra managers and members to exercise the
membership and assignment rules
"""

DEMO_PASSWORD = "password123"

# Structure: name, email, role
DEMO_USERS = [
    {"name": "Anita Rao", "email": "anita.rao@company.com", "role": "admin"},

    # Managers
    {"name": "Rajesh Kumar", "email": "rajesh.kumar@company.com", "role": "manager"},
    {"name": "Meera Joshi", "email": "meera.joshi@company.com", "role": "manager"},
    {"name": "Sanjay Patel", "email": "sanjay.patel@company.com", "role": "manager"},

    # Members
    {"name": "Priya Sharma", "email": "priya.sharma@company.com", "role": "user"},
    {"name": "Alex Thompson", "email": "alex.thompson@company.com", "role": "user"},
    {"name": "Kavya Nair", "email": "kavya.nair@company.com", "role": "user"},
    {"name": "Rohan Mehta", "email": "rohan.mehta@company.com", "role": "user"},
]
