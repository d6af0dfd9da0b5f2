"""
Demo projects for Taskhub
Creators and members are referenced by email and resolved when seeding
"""

# Structure: title, description, status, creator email, member emails
DEMO_PROJECTS = [
    {
        "title": "Site Revamp",
        "description": "Redesign of the public website with a new navigation and landing pages",
        "status": "in progress",
        "created_by": "rajesh.kumar@company.com",
        "members": [
            "rajesh.kumar@company.com",
            "priya.sharma@company.com",
            "alex.thompson@company.com",
        ],
    },
    {
        "title": "Q4 Sales Campaign",
        "description": "Campaign material and pricing pages for the Q4 launch",
        "status": "pending",
        "created_by": "meera.joshi@company.com",
        "members": [
            "meera.joshi@company.com",
            "sanjay.patel@company.com",
            "kavya.nair@company.com",
        ],
    },
    {
        "title": "Internal Wiki Migration",
        "description": "Move the old wiki pages into the new documentation space",
        "status": "completed",
        "created_by": "anita.rao@company.com",
        "members": ["rohan.mehta@company.com"],
    },
]
