"""Economy constants and placeholder catalog used before a personal config is imported."""

# Level progression: threshold hours and the multiplier unlocked at each level
LEVEL_THRESHOLDS = (0, 25, 75, 150, 300, 600, 1000, 1600, 2500, 4000)
MULTIPLIERS = (1.0, 1.1, 1.25, 1.4, 1.6, 1.85, 2.1, 2.4, 2.75, 3.2)

# Anti-gaming rules
DAILY_HARD_CAP_MINUTES = 12 * 60
DEFAULT_DAILY_SOFT_CAP_MINUTES = 360
SOFT_CAP_PENALTY = "0.3"
MINIMUM_SESSION_MINUTES = 5
MINIMUM_RECORDABLE_MINUTES = 1

DAY_SECONDS = 24 * 60 * 60

REVIEW_NOTE = "Requires review before action"

PLACEHOLDER_ACTIVITIES = ("Task 1", "Task 2", "Task 3")

# (name, base rate in points/hour, daily soft cap in minutes)
DEFAULT_DOMAINS = (
    ("Business", 16, 360),
    ("Freelancing", 14, 360),
    ("Education", 10, 360),
    ("Exercise", 9, 180),
    ("Domestic", 7, 240),
    ("Food", 6, 120),
)

# (category, name, price, cooldown days, requires review, real cost estimate)
DEFAULT_SHOP_ITEMS = (
    ("Tech", "AirPods", 25000, None, False, "£250"),
    ("Tech", "Apple Watch", 85000, None, False, "£400"),
    ("Tech", "iPad", 140000, None, False, "£600"),
    ("Tech", "MacBook Air", 220000, None, False, "£1,200"),
    ("Tech", "MacBook Pro", 350000, None, False, "£2,000"),
    ("Tech", "High-end Monitor", 120000, None, False, "£800"),
    ("Relaxation", "Cinema Trip", 6000, 7, False, "£15"),
    ("Relaxation", "Restaurant Date", 18000, 7, False, "£80"),
    ("Relaxation", "Guitar", 95000, None, False, "£500"),
    ("Relaxation", "Weekend Trip", 180000, None, False, "£400"),
    ("Relaxation", "Holiday (1 week)", 420000, None, False, "£1,500"),
    ("Relaxation", "Big Holiday (2-3 weeks)", 800000, None, False, "£3,000"),
    ("Equipment", "Blender", 28000, None, False, "£150"),
    ("Equipment", "Mechanical Keyboard", 55000, None, False, "£200"),
    ("Equipment", "Desk Upgrade", 70000, None, False, "£400"),
    ("Equipment", "Herman Miller Chair", 260000, None, False, "£1,200"),
    ("Transport", "Basic Car (Volkswagen)", 2200000, None, True, "£15,000"),
    ("Transport", "Advanced Car (Range Rover)", 6500000, None, True, "£60,000"),
    ("Transport", "Luxury Car (Porsche)", 8500000, None, True, "£80,000"),
    ("Transport", "Super Luxury (Ferrari)", 18000000, None, True, "£200,000"),
    ("Property", "Small Flat (2-room)", 22000000, None, True, "£200,000"),
    ("Property", "Medium House (5 rooms)", 45000000, None, True, "£500,000"),
    ("Property", "Large House (10+ rooms)", 85000000, None, True, "£1,000,000"),
    ("Property", "Deluxe Mansion", 140000000, None, True, "£2,000,000"),
    ("Meta-life", "Marriage Fund", 5000000, None, True, "£30,000"),
    ("Meta-life", "Live Anywhere Setup", 12000000, None, True, "£100,000"),
    ("Meta-life", "Seed Funding War Chest", 25000000, None, True, "£250,000"),
)

DEFAULT_BONUS_MILESTONES = (
    ("First £1,000 month freelancing", 50000),
    ("£3,000 month freelancing", 150000),
    ("First recurring client retainer", 75000),
    ("Launch a paid product", 200000),
    ("University grade milestone (First-class year)", 80000),
    ("Health milestone (consistent gym 12 weeks)", 40000),
)
