def format_budget(budget_min, budget_max) -> str:
    """Render a job budget range for listings, e.g. ``$100 - $500``."""
    if budget_min and budget_max:
        return f"${_amount(budget_min)} - ${_amount(budget_max)}"
    elif budget_min:
        return f"${_amount(budget_min)}+"
    elif budget_max:
        return f"Up to ${_amount(budget_max)}"
    return "Not specified"


def _amount(value) -> str:
    # 100.0 -> "100", 99.5 -> "99.5"
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"
