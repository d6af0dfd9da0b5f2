"""
Demo tasks and comments for Taskhub
Projects are referenced by title, people by email; None leaves a task unassigned
"""

from datetime import date, timedelta

today = date.today()

# Structure: title, description, project title, assignee email, status, priority, due date, comments
DEMO_TASKS = [
    {
        "title": "Design mockups",
        "description": "Wireframes and mockups for the new homepage and navigation",
        "project": "Site Revamp",
        "assigned_to": None,
        "status": "in-progress",
        "priority": "high",
        "due_date": today + timedelta(days=5),
        "comments": [
            ("rajesh.kumar@company.com", "First draft is due on Friday"),
        ],
    },
    {
        "title": "Responsive navigation",
        "description": "Mobile-first navigation component",
        "project": "Site Revamp",
        "assigned_to": "alex.thompson@company.com",
        "status": "todo",
        "priority": "medium",
        "due_date": today + timedelta(days=15),
        "comments": [],
    },
    {
        "title": "Content audit",
        "description": "List every page that needs new copy",
        "project": "Site Revamp",
        "assigned_to": "priya.sharma@company.com",
        "status": "done",
        "priority": "low",
        "due_date": today - timedelta(days=3),
        "comments": [
            ("priya.sharma@company.com", "Spreadsheet is in the shared drive"),
            ("anita.rao@company.com", "Thanks, looks complete"),
        ],
    },
    {
        "title": "Pricing page copy",
        "description": "Draft the copy for the new pricing tiers",
        "project": "Q4 Sales Campaign",
        "assigned_to": "sanjay.patel@company.com",
        "status": "todo",
        "priority": "high",
        "due_date": today - timedelta(days=1),
        "comments": [
            ("sanjay.patel@company.com", "Waiting on final prices from finance"),
        ],
    },
    {
        "title": "Email sequence",
        "description": "Three-step email sequence for existing customers",
        "project": "Q4 Sales Campaign",
        "assigned_to": "kavya.nair@company.com",
        "status": "todo",
        "priority": "medium",
        "due_date": None,
        "comments": [],
    },
    {
        "title": "Archive old pages",
        "description": "",
        "project": "Internal Wiki Migration",
        "assigned_to": "rohan.mehta@company.com",
        "status": "done",
        "priority": "low",
        "due_date": today - timedelta(days=20),
        "comments": [],
    },
]
