from rest_framework.views import APIView
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiResponse

from tracker.constants.health import AppHealthStatus, ComponentHealthStatus
from tracker_project.db.config import DatabaseManager


class HealthView(APIView):
    @extend_schema(
        operation_id="health_check",
        summary="Health check",
        description="Check the health status of the application and its components",
        tags=["health"],
        responses={
            200: OpenApiResponse(description="Application is healthy"),
            503: OpenApiResponse(description="Application is unhealthy"),
        },
    )
    def get(self, request):
        is_mongo_healthy = DatabaseManager().check_database_health()
        mongo_status = ComponentHealthStatus.UP if is_mongo_healthy else ComponentHealthStatus.DOWN
        overall_status = AppHealthStatus.UP if is_mongo_healthy else AppHealthStatus.DOWN

        response = {
            "status": overall_status.name,
            "components": {
                "mongodb": {"status": mongo_status.name},
            },
        }
        return Response(response, overall_status.http_status)
