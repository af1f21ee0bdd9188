"""Public contact intake endpoint.

Runs the contact form workflow for one submission: validates every field,
inserts a booking request, and answers with the localized notification the
site shows.
"""

from fastapi import APIRouter, Depends, Query
from starlette.status import HTTP_201_CREATED

from clinic.models.errors import ValidationError
from clinic.services.contact_form import ContactFormWorkflow, SubmitOutcome, maps_url
from clinic.services.record_store import RecordStoreClient
from clinic_api.dependencies import get_record_store_client
from clinic_api.models.contact import ContactSubmission, ContactSubmissionResponse

router = APIRouter(tags=["contact"])


@router.post(
    "/contact",
    summary="Submit a booking request",
    description="""
Validate the contact form and store it in booking_requests with status pending.

**Public endpoint** - no authentication required.

**Notes:**
- Values are trimmed before the length checks
- An empty message is stored as null
- Validation failures return one message per invalid field under `details`
""",
    status_code=HTTP_201_CREATED,
    response_model=ContactSubmissionResponse,
    responses={
        422: {"description": "One or more fields are invalid"},
        502: {"description": "The Record Store rejected or did not answer the insert"},
    },
)
async def submit_contact_form(
    body: ContactSubmission,
    lang: str = Query(default="en", description="Notification language (en or ar)"),
    record_store: RecordStoreClient = Depends(get_record_store_client),
) -> ContactSubmissionResponse:
    workflow = ContactFormWorkflow(record_store)
    for name, value in body.to_form_values().items():
        workflow.update_field(name, value)

    outcome = await workflow.submit(lang)
    if outcome == SubmitOutcome.INVALID:
        raise ValidationError(workflow.state.errors)
    if outcome == SubmitOutcome.FAILED:
        raise workflow.last_error  # type: ignore[misc]

    return ContactSubmissionResponse(
        notification=workflow.state.notifications[-1],
        maps_url=maps_url(),
    )
