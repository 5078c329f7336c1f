import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from services.matching import RepositoryError, run_matching_cycle

logger = logging.getLogger(__name__)


@api_view(['GET'])
@permission_classes([AllowAny])
def internal_matching(request):
    """
    Run one matching cycle.

    Meant to be polled at a fixed interval from inside the deployment;
    answers 204 whether or not anything was matched.
    """
    try:
        result = run_matching_cycle()
    except RepositoryError as exc:
        logger.exception("Matching cycle failed")
        return Response({'message': str(exc)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    logger.debug("Internal matching matched %d ride(s)", result.matched_count)
    return Response(status=status.HTTP_204_NO_CONTENT)
