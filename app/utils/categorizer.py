from typing import Optional, Tuple

EXPENSE_CATEGORIES = [
    "Food & Dining",
    "Transportation",
    "Shopping",
    "Entertainment",
    "Bills & Utilities",
    "Healthcare",
    "Education",
    "Travel",
    "Income",
    "Other",
]

DEFAULT_CATEGORY = "Other"

# Checked in order; the first category with a matching keyword wins.
CATEGORY_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("Food & Dining", ("restaurant", "food", "cafe", "lunch", "dinner", "breakfast",
                       "grocery", "uber eats", "doordash", "grubhub")),
    ("Transportation", ("uber", "lyft", "gas", "fuel", "parking", "metro", "bus",
                        "train", "taxi", "vehicle")),
    ("Shopping", ("amazon", "store", "shop", "mall", "purchase", "buy", "retail")),
    ("Entertainment", ("movie", "netflix", "spotify", "game", "concert", "theatre",
                       "entertainment", "subscription")),
    ("Bills & Utilities", ("electric", "water", "internet", "phone", "bill", "utility",
                           "rent", "mortgage")),
    ("Healthcare", ("doctor", "hospital", "pharmacy", "medical", "health", "clinic",
                    "medicine")),
    ("Education", ("school", "course", "book", "tuition", "education", "training")),
    ("Travel", ("hotel", "flight", "airbnb", "booking", "travel", "vacation", "trip")),
)


def categorize(title: str, amount: Optional[float] = None) -> str:
    """Map a transaction title to a category by keyword. ``amount`` is currently unused."""
    title_lower = title.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in title_lower for keyword in keywords):
            return category
    return DEFAULT_CATEGORY
