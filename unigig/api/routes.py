from fastapi import APIRouter
from unigig.controllers import auth_controller
from unigig.controllers import job_controller
from unigig.controllers import application_controller
from unigig.controllers import profile_controller
from unigig.controllers import dashboard_controller
from unigig.controllers import log_controller


router = APIRouter()


router.include_router(auth_controller.router, prefix="/auth", tags=["auth"])
router.include_router(job_controller.router, prefix="/jobs", tags=["jobs"])
router.include_router(application_controller.router, prefix="/applications", tags=["applications"])
router.include_router(profile_controller.router, prefix="/profiles", tags=["profiles"])
router.include_router(dashboard_controller.router, prefix="", tags=["dashboard"])
router.include_router(log_controller.router, prefix="/logs", tags=["logs"])
