"""
API endpoints for the caller's security questions.

The questions are what the security-question password reset asks for; only
the question texts are ever returned.
"""

from fastapi import APIRouter, status

from mindful_heaven.core.models.io import SecurityQuestionCatalogue, SecurityQuestionsRead, SecurityQuestionsSave
from mindful_heaven.server.core.constant import SECURITY_QUESTIONS
from mindful_heaven.server.services.deps import CurrentUserDep, SessionDep
from mindful_heaven.server.services.security_questions import SecurityQuestionService

router = APIRouter(tags=["security-questions"])


@router.get(
    "/catalogue",
    response_model=SecurityQuestionCatalogue,
    summary="List Available Questions",
    description="Questions a user may pick from.",
)
async def question_catalogue() -> SecurityQuestionCatalogue:
    return SecurityQuestionCatalogue(questions=list(SECURITY_QUESTIONS))


@router.get(
    "",
    response_model=SecurityQuestionsRead,
    summary="Get My Security Questions",
    description="The caller's configured questions, without answers.",
)
async def get_my_questions(user: CurrentUserDep, session: SessionDep) -> SecurityQuestionsRead:
    record = await SecurityQuestionService(session).get(user.id)
    if record is None:
        return SecurityQuestionsRead(has_questions=False)
    return SecurityQuestionsRead(has_questions=True, question1=record.question1, question2=record.question2)


@router.put(
    "",
    response_model=SecurityQuestionsRead,
    status_code=status.HTTP_200_OK,
    summary="Save My Security Questions",
    description="Set or replace both questions and their answers.",
    responses={
        200: {"description": "Questions saved"},
        400: {"description": "Questions missing, identical or unknown, or an answer is blank"},
    },
)
async def save_my_questions(
    payload: SecurityQuestionsSave, user: CurrentUserDep, session: SessionDep
) -> SecurityQuestionsRead:
    """
    Save security questions.

    - **question1**, **question2**: Two different questions from the catalogue.
    - **answer1**, **answer2**: Answers; compared later ignoring case and surrounding spaces.
    """
    record = await SecurityQuestionService(session).save(
        user.id, payload.question1, payload.question2, payload.answer1, payload.answer2
    )
    return SecurityQuestionsRead(has_questions=True, question1=record.question1, question2=record.question2)
