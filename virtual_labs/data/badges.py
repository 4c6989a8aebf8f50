from virtual_labs.domain.models import Badge

# Lab badges: earned by completing a number of distinct labs
LAB_BADGES = [
    Badge(
        id="lab_assistant",
        name="Lab Assistant",
        description="Complete your first Virtual Lab.",
        category="lab",
        xp_value=75,
        labs_required=1,
    ),
    Badge(
        id="lab_researcher",
        name="Lab Researcher",
        description="Complete 3 Virtual Labs.",
        category="lab",
        xp_value=150,
        labs_required=3,
    ),
]
