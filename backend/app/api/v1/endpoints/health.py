from fastapi import APIRouter

from app.core.config import settings


router = APIRouter(tags=['health'])


@router.get('/health')
def health() -> dict[str, str]:
    return {'status': 'ok', 'service': 'assessment-api', 'environment': settings.APP_ENV}
