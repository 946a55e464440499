from fastapi import APIRouter

from user_service.core.responses import EnvelopeResponse, success_envelope

router = APIRouter(tags=['health'])

HEALTH_METHODS = ['GET', 'HEAD', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS']


@router.api_route('/health', methods=HEALTH_METHODS, response_model=EnvelopeResponse)
def health():
    return success_envelope('API is healthy')
