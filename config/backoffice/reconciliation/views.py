"""
Views para importar estados desde planillas (correo / sistema de ventas)
"""
import logging

from django.conf import settings
from django.db import DatabaseError
from drf_spectacular.utils import extend_schema
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, MultiPartParser

from ..core.api_responses import error_response, success_response
from ..permissions import HasManagementRole
from .errors import MissingColumnError, ReconciliationError
from .orchestrator import reconcile_sale_statuses, reconcile_shipment_statuses
from .serializers import SaleStatusUploadSerializer, ShipmentStatusUploadSerializer
from .tables import parse_uploaded_table

logger = logging.getLogger(__name__)


@extend_schema(tags=['Actualizar'])
class ReconciliationViewSet(viewsets.GenericViewSet):
    """
    ViewSet para actualizar estados en lote

    - correo: planilla de seguimiento del correo
    - estado-venta: planilla del sistema de ventas

    Solo roles de gestión (SUPERVISOR, BACK_OFFICE, SUPERADMIN, ADMIN).
    """
    permission_classes = [permissions.IsAuthenticated, HasManagementRole]
    parser_classes = [MultiPartParser, FormParser]

    def get_serializer_class(self):
        if self.action == 'estado_venta':
            return SaleStatusUploadSerializer
        return ShipmentStatusUploadSerializer

    def _check_file(self, request):
        uploaded = request.FILES.get('file')
        if uploaded is None:
            return error_response(
                detail='No se subió ningún archivo',
                code='MISSING_FILE',
                http_status=status.HTTP_400_BAD_REQUEST,
            )

        max_bytes = int(getattr(settings, 'RECONCILIATION_MAX_UPLOAD_MB', 10)) * 1024 * 1024
        if uploaded.size > max_bytes:
            return error_response(
                detail=f'El archivo es demasiado grande. Máximo permitido: {max_bytes // (1024 * 1024)}MB',
                code='FILE_TOO_LARGE',
                http_status=status.HTTP_400_BAD_REQUEST,
            )
        return None

    def _reconcile(self, request, reconcile, noun, success_code):
        error = self._check_file(request)
        if error is not None:
            return error

        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            table = parse_uploaded_table(serializer.validated_data['file'])
            count = reconcile(table, serializer.column_overrides())
        except MissingColumnError as exc:
            return error_response(
                detail=str(exc),
                code=exc.code,
                http_status=status.HTTP_400_BAD_REQUEST,
                updated_count=exc.accepted_count,
            )
        except ReconciliationError as exc:
            return error_response(
                detail=str(exc),
                code=exc.code,
                http_status=status.HTTP_400_BAD_REQUEST,
            )
        except DatabaseError as exc:
            logger.exception('Error en la actualizacion de %s', noun)
            return error_response(
                detail=f'Error al actualizar {noun}: {exc}',
                code='RECONCILIATION_FAILED',
                http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        logger.info('Usuario %s actualizo %s %s', request.user.username, count, noun)
        return success_response(
            detail=f'Se actualizaron {count} {noun}',
            code=success_code,
            updated_count=count,
        )

    @action(detail=False, methods=['post'])
    def correo(self, request):
        """Actualizar estados de guía desde la exportación del correo"""
        return self._reconcile(
            request,
            reconcile_shipment_statuses,
            noun='correos',
            success_code='SHIPMENT_STATUSES_UPDATED',
        )

    @action(detail=False, methods=['post'], url_path='estado-venta')
    def estado_venta(self, request):
        """Actualizar estados de venta desde la exportación del sistema de ventas"""
        return self._reconcile(
            request,
            reconcile_sale_statuses,
            noun='estados de venta',
            success_code='SALE_STATUSES_UPDATED',
        )
