"""Sample planning month used for demos and tests.

Go-live dates are expressed as day offsets from the day the data is loaded.
"""

TEAMS = [
    {"name": "Creative", "members": 6, "working_days": 20, "days_off": 3, "creative_planning_days": 3},
    {"name": "Performance", "members": 3, "working_days": 20, "days_off": 2, "creative_planning_days": 4},
    {"name": "Content", "members": 4, "working_days": 20, "days_off": 4, "creative_planning_days": 2},
]

# Must total 100%
WORKSTREAM_ALLOCATIONS = {
    "SoMe": 0.50,
    "PUA": 0.25,
    "ASO": 0.15,
    "Portal": 0.10,
}

STRATEGIC_PRIORITIES = [
    {"name": "Free House", "weight": 0.40, "workstreams": ["SoMe", "PUA", "Portal"]},
    {"name": "Sweet Pea Cottage", "weight": 0.30, "workstreams": ["SoMe", "PUA"]},
    {"name": "Brand Focused Project", "weight": 0.20, "workstreams": ["SoMe", "Portal", "ASO"]},
    {"name": "Black Friday Sales", "weight": 0.10, "workstreams": ["ASO", "Portal"]},
]

WORKSTREAM_PRIORITIES = {
    "SoMe": [
        {"name": "Instagram Content Calendar", "weight": 0.20},
        {"name": "TikTok Growth Strategy", "weight": 0.15},
        {"name": "Community Engagement Plan", "weight": 0.10},
        {"name": "Influencer Partnerships", "weight": 0.08},
    ],
    "PUA": [
        {"name": "Google Ads Optimization", "weight": 0.25},
        {"name": "Facebook Campaign Refresh", "weight": 0.15},
        {"name": "Retargeting Strategy", "weight": 0.10},
    ],
    "ASO": [
        {"name": "Keyword Research Update", "weight": 0.30},
        {"name": "A/B Testing Screenshots", "weight": 0.20},
        {"name": "Reviews & Ratings Campaign", "weight": 0.15},
    ],
    "Portal": [
        {"name": "User Dashboard Redesign", "weight": 0.15},
        {"name": "Mobile Experience Update", "weight": 0.12},
        {"name": "Analytics Integration", "weight": 0.10},
    ],
}

# (description, size, origin, team, go-live offset in days)
WORKSTREAM_ASSETS = {
    "SoMe": [
        ("Free House Teaser", "M", "PMM", "Creative", 30),
        ("Free House Trailer", "L", "PMM", "Creative", 25),
        ("Free House Stories", "S", "PMM", "Creative", 20),
        ("Sweet Pea Cottage Reveal Video", "L", "PMM", "Creative", 35),
        ("Sweet Pea Before/After Reels", "M", "PMM", "Creative", 32),
        ("Sweet Post", "S", "Workstream", "Creative", 28),
        ("OK Street Location Tour", "L", "PMM", "Creative", 45),
        ("Brand Guidelines Social Templates", "M", "Workstream", "Creative", 15),
        ("Black Friday Countdown Content", "S", "PMM", "Creative", 50),
        ("Flash Sale Graphics", "S", "Workstream", "Creative", 48),
        ("Roadmap Post", "S", "Workstream", "Content", 5),
        ("Super Fans: Decoration", "S", "Workstream", "Creative", 22),
        ("Evergreen 1", "XS", "Workstream", "Content", 8),
        ("Everygreen 2", "M", "Workstream", "Creative", 18),
        ("Evergreen 3", "M", "Workstream", "Content", 12),
    ],
    "PUA": [
        ("Free House Trailer Cut", "M", "PMM", "Content", 25),
        ("Friendship story Edit", "M", "PMM", "Performance", 20),
        ("Sweet Pea Stills", "XS", "PMM", "Content", 30),
        ("Sweet Pea Life", "S", "PMM", "Performance", 28),
        ("WILD CARD", "M", "PMM", "Content", 48),
        ("WILD CARD 2", "M", "Workstream", "Content", 45),
        ("Q1 Ad Copy Variants (50x)", "M", "Workstream", "Content", 10),
        ("Display Network Banners", "M", "Workstream", "Content", 15),
        ("Performance Dashboard Setup", "M", "Workstream", "Performance", 8),
        ("A/B Testing Framework", "S", "Workstream", "Performance", 12),
        ("Conversion Tracking Update", "S", "Workstream", "Performance", 5),
    ],
    "ASO": [
        ("Brand App Store Graphics", "S", "PMM", "Performance", 35),
        ("Brand Messaging in App Desc", "S", "PMM", "Performance", 30),
        ("iOS Screenshots Optimization", "S", "Workstream", "Performance", 20),
        ("Android Store Listing Update", "S", "Workstream", "Performance", 22),
        ("App Preview Videos (2x)", "M", "Workstream", "Performance", 25),
        ("Localization Updates", "S", "Workstream", "Performance", 15),
    ],
    "Portal": [
        ("Free House Portal Section", "XS", "PMM", "Creative", 40),
        ("Free House Virtual Tour", "XS", "PMM", "Creative", 35),
        ("Know your crumpet 1 Artical", "XS", "PMM", "Creative", 30),
        ("Know your crumpet 2 Artical", "XS", "PMM", "Content", 28),
        ("Portal Sweet Pea Gifts 1", "XS", "Workstream", "Creative", 18),
        ("Portal Sweet Pea Gifts 2", "XS", "Workstream", "Creative", 25),
        ("Portal Sweet shop link", "XS", "Workstream", "Content", 12),
        ("Portal Sweet Pea trailer cut", "XS", "Workstream", "Content", 15),
        ("Road map", "XS", "Workstream", "Content", 8),
        ("Portal Sweet Pea Gifts 3", "XS", "Workstream", "Content", 10),
    ],
}

# (description, size, go-live offset in days)
TEAM_INITIATIVES = {
    "Creative": [
        ("Design System Documentation", "S", 20),
        ("Brand Asset Library Update", "M", 25),
        ("Creative Process Optimization", "XS", 15),
    ],
    "Performance": [
        ("Q1 Analytics Audit", "S", 25),
    ],
    "Content": [
        ("Editorial Calendar System", "S", 22),
        ("Content Style Guide Update", "M", 14),
    ],
}
