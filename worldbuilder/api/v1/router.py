# worldbuilder/api/v1/router.py
from fastapi import APIRouter

from worldbuilder.api.v1 import (
    auth, creatures, eras, gear, magic_builds, races, settings, skills, special_abilities, world, world_details,
)

# Create the main router
api_router = APIRouter()

# Include all the sub-routers
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(eras.router, prefix="/world/eras", tags=["eras"])
api_router.include_router(world.router, prefix="/world", tags=["world"])
api_router.include_router(world_details.router, prefix="/world-details", tags=["world-details"])
api_router.include_router(settings.router, prefix="/settings", tags=["settings"])
api_router.include_router(races.router, prefix="/races", tags=["races"])
api_router.include_router(creatures.router, prefix="/creatures", tags=["creatures"])
api_router.include_router(gear.items_router, prefix="/items", tags=["items"])
api_router.include_router(gear.armors_router, prefix="/armors", tags=["armors"])
api_router.include_router(skills.router, prefix="/skills", tags=["skills"])
api_router.include_router(magic_builds.router, prefix="/magic-builds", tags=["magic-builds"])
api_router.include_router(special_abilities.router, prefix="/special-abilities", tags=["special-abilities"])
