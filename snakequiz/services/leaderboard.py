from functools import cmp_to_key


def _compare(a, b):
    if a["score"] != b["score"]:
        return -1 if a["score"] > b["score"] else 1
    # Finish time only breaks ties when both players have one
    if a.get("finishTime") and b.get("finishTime"):
        if a["finishTime"] != b["finishTime"]:
            return -1 if a["finishTime"] < b["finishTime"] else 1
    return 0


def build_leaderboard(players):
    """Ranked view of session records: score desc, then earlier finish time."""
    ordered = sorted(players, key=cmp_to_key(_compare))
    return [
        {
            "rank": idx + 1,
            "name": p["name"],
            "org": p["org"],
            "designation": p["designation"],
            "score": p["score"],
            "finished": p["finished"],
        }
        for idx, p in enumerate(ordered)
    ]


def find_rank(leaderboard, name, org):
    return next((row["rank"] for row in leaderboard if row["name"] == name and row["org"] == org), None)
