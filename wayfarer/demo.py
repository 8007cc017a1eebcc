"""Create a demo adventure for development/testing."""

from __future__ import annotations

import shutil

from wayfarer.models import Adventure, AdventureObject, Location, Route, Script, Source
from wayfarer.pipeline import create_adventure, create_source, update_script
from wayfarer.storage import NIL_KEY, Storage

DEMO_NAME = "The Lighthouse Keeper"

HELPERS_LUA = """
function visits()
    return game:GetGameStatePropertyNumber("Visits")
end
"""

COUNTER_LUA = """
function count_visit()
    game:SetGameStatePropertyNumber("Visits", visits() + 1)
end
"""

ENTER_LIGHTHOUSE_LUA = """
function run()
    count_visit()
    game:SetGameStatePropertyBoolean("LampSeen", true)
    result = visits()
end
"""

INIT_LUA = """
function run()
    game:SetGameStatePropertyBoolean("GameInitialized", true)
    game:SetGameStatePropertyString("Weather", "fog")
    result = true
end
"""

TERMINATE_LUA = """
function run()
    game:SetGameStatePropertyBoolean("GameTerminated", true)
    result = true
end
"""


def create_demo_data(storage: Storage) -> Adventure:
    """Wipe the data directory and build the demo adventure."""
    base = storage.base_path
    storage.rollback()
    if base.exists():
        shutil.rmtree(base)
    base.mkdir(parents=True, exist_ok=True)

    with storage.transaction():
        adventure = create_adventure(
            storage, DEMO_NAME,
            "A storm, a cliff, and a lamp that has not been lit in years.",
        )

        def text(name: str, body: str) -> Source:
            return create_source(
                storage,
                Source(key=NIL_KEY, adventure_id=adventure.id, name=name, text=body),
                languages=list(storage.settings.languages),
            )

        def script(name: str, content: str, includes: list[int] | None = None) -> Script:
            return update_script(
                storage, Script(adventure_id=adventure.id, name=name, content=content), includes
            )

        helpers = script("helpers", HELPERS_LUA)
        counter = script("counter", COUNTER_LUA, [helpers.id])
        enter_lighthouse = script("enter_lighthouse", ENTER_LIGHTHOUSE_LUA, [helpers.id, counter.id])
        adventure.initialization_script_id = script("init", INIT_LUA).id
        adventure.termination_script_id = script("terminate", TERMINATE_LUA).id

        lamp = storage.objects.add(AdventureObject(adventure_id=adventure.id, name="lamp"))
        lamp.name_source_key = text("lamp_name", "brass lamp").key
        lamp.description_source_key = text(
            "lamp_description",
            "{script: if game:GetGameStatePropertyBoolean('LampSeen') then "
            "return 'It still smells of oil.' else return 'Dusty and cold.' end }",
        ).key

        adventure.initial_source_key = text(
            "intro",
            "The fog is {script: return game:GetGameStatePropertyString('Weather') } "
            "and the tide is coming in.",
        ).key

        beach = storage.locations.add(Location(
            adventure_id=adventure.id, name="Beach", initial=True,
            source_key=text("beach", "Wet sand. A path climbs toward the lighthouse.").key,
        ))
        lighthouse = storage.locations.add(Location(
            adventure_id=adventure.id, name="Lighthouse",
            enter_script_id=enter_lighthouse.id,
            source_key=text(
                "lighthouse",
                "Visit number {script: return game:GetGameStatePropertyNumber('Visits') }. "
                "A {object:%d} hangs from a hook." % lamp.id,
            ).key,
        ))
        gallery = storage.locations.add(Location(
            adventure_id=adventure.id, name="Lamp gallery", final=True,
            source_key=text("gallery", "You light the lamp. Ships turn away from the rocks.").key,
        ))
        lamp.location_ids = [lighthouse.id]

        for origin, destination, choice, taken in (
            (beach, lighthouse, "Climb the path", "You climb, slipping twice."),
            (lighthouse, beach, "Go back down", "You return to the shore."),
            (lighthouse, gallery, "Climb the stairs", "The stairs spiral up into the dark."),
        ):
            storage.routes.add(Route(
                location_id=origin.id,
                destination_location_id=destination.id,
                name=choice,
                source_key=text(f"{choice}_choice", choice).key,
                route_taken_source_key=text(f"{choice}_taken", taken).key,
            ))

    return adventure
