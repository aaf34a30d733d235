"""Authorization router exposing engine decisions to the front end."""

import logging

from fastapi import APIRouter, Depends

from authz.dependencies.auth import get_current_principal, get_engine
from authz.models.principal import Principal
from authz.policies.engine import DecisionEngine
from authz.policies.queries import permission_summary, role_summary
from authz.schemas.authorization import (
    EvaluateRequest,
    EvaluateResponse,
    MatrixResponse,
    PermissionSummaryResponse,
    RoleSummaryResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/permissions/{resource_type}", response_model=PermissionSummaryResponse)
async def get_permissions(
    resource_type: str,
    principal: Principal = Depends(get_current_principal),
    engine: DecisionEngine = Depends(get_engine),
):
    """Type-level permissions of the current principal on a resource type."""
    summary = permission_summary(engine, principal, resource_type)
    return PermissionSummaryResponse(resource_type=resource_type, **summary.as_dict())


@router.post("/evaluate", response_model=EvaluateResponse)
async def evaluate(
    request: EvaluateRequest,
    principal: Principal = Depends(get_current_principal),
    engine: DecisionEngine = Depends(get_engine),
):
    """Pre-flight an operation, optionally against a concrete document."""
    allowed = engine.evaluate(principal, request.resource_type, request.operation, request.document)

    logger.info(
        f"User {principal.id} evaluated {request.operation.value} on {request.resource_type}",
        extra={
            "user_id": principal.id,
            "resource_type": request.resource_type,
            "operation": request.operation.value,
            "allowed": allowed,
            "instance_level": request.document is not None,
        },
    )

    return EvaluateResponse(
        allowed=allowed,
        resource_type=request.resource_type,
        operation=request.operation,
    )


@router.get("/me", response_model=RoleSummaryResponse)
async def get_role_summary(
    principal: Principal = Depends(get_current_principal),
    engine: DecisionEngine = Depends(get_engine),
):
    """Role classification of the current principal."""
    summary = role_summary(engine, principal)
    return RoleSummaryResponse(user_id=principal.id, role=principal.role, **summary.as_dict())


@router.get("/matrix", response_model=MatrixResponse)
async def get_matrix(
    principal: Principal = Depends(get_current_principal),
    engine: DecisionEngine = Depends(get_engine),
):
    """The shared configuration the engine is currently evaluating with."""
    config = engine.config
    return MatrixResponse(
        version=config.version,
        fingerprint=config.fingerprint,
        matrix=config.as_dict(),
    )
