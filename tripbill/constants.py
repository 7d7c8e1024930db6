from zoneinfo import ZoneInfo

IST_TZ = ZoneInfo("Asia/Kolkata")

MONTHS_EN = {
    1: "Jan",
    2: "Feb",
    3: "Mar",
    4: "Apr",
    5: "May",
    6: "Jun",
    7: "Jul",
    8: "Aug",
    9: "Sep",
    10: "Oct",
    11: "Nov",
    12: "Dec",
}

RUPEE_SYMBOL = "₹"

NOT_SPECIFIED = "Not specified"

# Number of service detail strings surfaced in the accommodation section.
DETAIL_PREVIEW_SLOTS = 5


def yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"
