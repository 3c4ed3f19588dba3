from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from app.services.reference_data import ReferenceData


def get_reference_data(request: Request) -> ReferenceData:
    reference = getattr(request.app.state, "reference_data", None)
    if reference is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Reference data not loaded",
        )
    return reference


Reference = Annotated[ReferenceData, Depends(get_reference_data)]
