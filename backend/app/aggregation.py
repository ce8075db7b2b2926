# backend/app/aggregation.py
"""
Read-only aggregation over collections of plain records.
Transactions are assumed to have passed validation: `type` is income or expense.
"""
from backend.app.schemas import DEFAULT_CATEGORY


def filter_by_month(entries, month: str) -> list:
    """Entries whose date string starts with `month` (YYYY-MM). Plain prefix match, no timezone handling."""
    return [e for e in entries if e.get("date") and e["date"][:7] == month]


def summary(entries) -> dict:
    income = 0
    expense = 0
    count = 0
    for e in entries:
        if e["type"] == "income":
            income += e["amount"]
        elif e["type"] == "expense":
            expense += e["amount"]
        count += 1
    return {"income": income, "expense": expense, "balance": income - expense, "count": count}


def category_report(entries, month=None) -> dict:
    if month:
        entries = filter_by_month(entries, month)

    categories = {}
    for e in entries:
        cat = e.get("category") or DEFAULT_CATEGORY
        if cat not in categories:
            categories[cat] = {"income": 0, "expense": 0, "count": 0}
        categories[cat][e["type"]] += e["amount"]
        categories[cat]["count"] += 1
    return categories


def goal_progress(goal: dict) -> float:
    target = goal.get("targetAmount") or 0
    if target <= 0:
        return 0
    return (goal.get("currentAmount") or 0) / target * 100


def budget_status(budgets, entries, month=None) -> list:
    """
    Compare each budget against the expenses recorded for its category in its month.
    Categories match by exact string; optionally only budgets for `month` are reported.
    """
    if month:
        budgets = [b for b in budgets if b.get("month") == month]

    spent_by_key = {}
    for e in entries:
        if e["type"] != "expense" or not e.get("date"):
            continue
        key = (e.get("category") or DEFAULT_CATEGORY, e["date"][:7])
        spent_by_key[key] = spent_by_key.get(key, 0) + e["amount"]

    result = []
    for b in budgets:
        limit = b["amount"]
        spent = spent_by_key.get((b.get("category") or DEFAULT_CATEGORY, b.get("month")), 0)
        remaining = limit - spent
        spent_percent = spent / limit * 100

        if remaining < 0:
            status = "overspent"
        elif spent_percent >= 80:
            status = "close to limit"
        else:
            status = "within budget"

        result.append({
            "id": b.get("id"),
            "category": b.get("category") or DEFAULT_CATEGORY,
            "month": b.get("month"),
            "spent": round(spent, 2),
            "budget_limit": float(limit),
            "remaining": round(remaining, 2),
            "spent_percent": round(spent_percent, 1),
            "status": status,
        })

    result.sort(key=lambda x: x["spent"], reverse=True)
    return result
