# exam_backend/routers.py
from typing import List

from fastapi import APIRouter, Depends

from exam_backend import crud, schemas
from exam_backend.database import JsonStore, get_db
from exam_backend.models import Student

router = APIRouter()
student_router = APIRouter(prefix="/api/student", tags=["Student"])
admin_router = APIRouter(prefix="/api/admin", tags=["Admin"])

ERRORS = {
    400: {"model": schemas.ErrorResponse},
    403: {"model": schemas.ErrorResponse},
    404: {"model": schemas.ErrorResponse},
}


# Root endpoint
@router.get("/")
async def root():
    return {"message": "API is working", "docs": "/docs"}


# ---------- STUDENT ----------

@student_router.post("/login", response_model=Student, responses={400: ERRORS[400]})
async def login(payload: schemas.LoginRequest, db: JsonStore = Depends(get_db)):
    """Register a student on first login; later logins return the stored record."""
    return await crud.register_or_fetch(db, payload)


@student_router.get(
    "/tests/{student_id}",
    response_model=List[schemas.AvailableTest],
    responses={404: ERRORS[404]},
)
async def available_tests(student_id: str, db: JsonStore = Depends(get_db)):
    return await crud.list_available_tests(db, student_id)


@student_router.get("/test/{test_id}", response_model=schemas.TestPaper, responses={404: ERRORS[404]})
async def test_paper(test_id: str, db: JsonStore = Depends(get_db)):
    return await crud.get_test_paper(db, test_id)


@student_router.post("/submit", response_model=schemas.ScoreResponse, responses={403: ERRORS[403], 404: ERRORS[404]})
async def submit(payload: schemas.SubmitRequest, db: JsonStore = Depends(get_db)):
    """Score and record a submission. Only the first one per student and test counts."""
    return await crud.submit_answers(db, payload)


# ---------- ADMIN ----------

@admin_router.post("/test", response_model=schemas.StatusResponse, responses={400: ERRORS[400]})
async def create_test(payload: schemas.TestCreate, db: JsonStore = Depends(get_db)):
    return await crud.create_test(db, payload)


@admin_router.get("/results", response_model=List[schemas.ResultRow])
async def results(db: JsonStore = Depends(get_db)):
    return await crud.list_results(db)


router.include_router(student_router)
router.include_router(admin_router)
