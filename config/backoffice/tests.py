from decimal import Decimal
from io import BytesIO, StringIO
from types import SimpleNamespace

import pandas as pd
from django.contrib.auth.models import Group, User
from django.core.exceptions import ValidationError
from django.core.files.uploadedfile import SimpleUploadedFile
from django.core.management import call_command
from django.test import SimpleTestCase, TestCase, override_settings
from django.urls import reverse
from rest_framework.test import APITestCase

from .core.constants import ROLE_BACK_OFFICE, ROLE_SUPERVISOR, ROLE_VENDEDOR, ROLES
from .core.services import actor_id_for, create_sale, create_shipment, record_shipment_status
from .models import (
    AUTOMATED_ACTOR_ID,
    Plan,
    Sale,
    SaleStatus,
    SaleStatusEvent,
    Shipment,
    ShipmentStatus,
    ShipmentStatusEvent,
)
from .reconciliation import (
    EmptyTableError,
    MissingColumnError,
    UnsupportedFileError,
    parse_uploaded_table,
    reconcile_sale_statuses,
    reconcile_shipment_statuses,
)
from .reconciliation.columns import SALE_COLUMNS, SHIPMENT_COLUMNS, cell, resolve_columns
from .reconciliation.gateway import DjangoStatusGateway, StatusGateway
from .reconciliation.matching import SaleIndex, ShipmentIndex
from .reconciliation.policy import SALE_POLICY, SHIPMENT_POLICY

SHIPMENT_HEADERS = ["Guia", "Estado Guia", "Ultimo Evento Nombre", "Ubicacion"]
SALE_HEADERS = ["SDS", "DESCRIPCION ESTADO", "DESCRIPCION RECHAZOS"]


def make_shipment(sap_id, **extra):
    data = {
        "sap_id": sap_id,
        "recipient": "Cliente Test",
        "contact_phone": "099123456",
        "address": "Av. Italia",
        "house_number": 1234,
        "locality": "Montevideo",
        "department": "Montevideo",
        "postal_code": 11300,
        "created_by": "testuser",
    }
    data.update(extra)
    return Shipment.objects.create(**data)


def make_plan(**extra):
    data = {
        "name": "Plan 20GB",
        "price": Decimal("990.00"),
        "gigabytes": 20,
        "calls": "Ilimitadas",
        "messages": "Ilimitados",
    }
    data.update(extra)
    return Plan.objects.create(**data)


def event(status, actor_id=AUTOMATED_ACTOR_ID):
    return SimpleNamespace(status=status, actor_id=actor_id)


class ColumnResolverTest(SimpleTestCase):
    def test_resolve_columns_by_header(self):
        """Cada campo toma la posicion de su encabezado"""
        headers = ["Otro", "Estado Guia", "Guia", "Ubicacion", "Ultimo Evento Nombre"]
        columns = resolve_columns(headers, SHIPMENT_COLUMNS)
        self.assertEqual(
            columns,
            {"shipment_key": 2, "status": 1, "description": 4, "location": 3},
        )

    def test_duplicate_header_last_wins(self):
        """Si un encabezado se repite gana la ultima aparicion"""
        headers = ["Guia", "Estado Guia", "Guia"]
        columns = resolve_columns(headers, SHIPMENT_COLUMNS)
        self.assertEqual(columns["shipment_key"], 2)

    def test_override_replaces_header(self):
        """Una posicion indicada reemplaza a la encontrada"""
        columns = resolve_columns(SHIPMENT_HEADERS, SHIPMENT_COLUMNS, {"shipment_key": 5})
        self.assertEqual(columns["shipment_key"], 5)
        self.assertEqual(columns["status"], 1)

    def test_override_zero_is_honored(self):
        columns = resolve_columns(SHIPMENT_HEADERS, SHIPMENT_COLUMNS, {"status": 0})
        self.assertEqual(columns["status"], 0)

    def test_missing_optional_column_defaults_to_zero(self):
        columns = resolve_columns(["Estado Guia", "Guia"], SHIPMENT_COLUMNS)
        self.assertEqual(columns["description"], 0)
        self.assertEqual(columns["location"], 0)

    def test_sale_headers_are_stripped(self):
        """Los encabezados de ventas se comparan sin espacios sobrantes"""
        headers = [" SDS ", "DESCRIPCION ESTADO  ", "DESCRIPCION RECHAZOS"]
        columns = resolve_columns(headers, SALE_COLUMNS, strip=True)
        self.assertEqual(columns, {"sale_code": 0, "status": 1, "description": 2})

    def test_missing_required_column_raises(self):
        with self.assertRaises(MissingColumnError) as context:
            resolve_columns(["DESCRIPCION ESTADO"], SALE_COLUMNS, strip=True)

        self.assertEqual(context.exception.labels, ["SDS"])
        self.assertEqual(context.exception.accepted_count, 0)
        self.assertIn("SDS", str(context.exception))

    def test_override_supplies_required_column(self):
        columns = resolve_columns(["X", "DESCRIPCION ESTADO"], SALE_COLUMNS, {"sale_code": 0}, strip=True)
        self.assertEqual(columns["sale_code"], 0)

    def test_cell_out_of_range_is_none(self):
        self.assertEqual(cell(["a", "b"], 1), "b")
        self.assertIsNone(cell(["a", "b"], 2))


class RowMatcherTest(SimpleTestCase):
    def test_shipment_index_returns_every_match(self):
        first = SimpleNamespace(id=1, sap_id="TRK1")
        second = SimpleNamespace(id=2, sap_id="TRK1")
        other = SimpleNamespace(id=3, sap_id="TRK2")
        index = ShipmentIndex([first, second, other])

        self.assertEqual(index.match("TRK1"), [first, second])
        self.assertEqual(index.match("NOPE"), [])
        self.assertEqual(index.match(None), [])
        self.assertEqual(len(index), 3)

    def test_sale_index_last_wins(self):
        """Con un SDS repetido se usa la ultima venta leida"""
        first = SimpleNamespace(id=1, sds="S1")
        last = SimpleNamespace(id=2, sds="S1")
        index = SaleIndex([first, last])

        self.assertIs(index.match("S1"), last)
        self.assertIsNone(index.match("S2"))
        self.assertIsNone(index.match(None))


class TransitionPolicyTest(SimpleTestCase):
    def test_no_history_rejects(self):
        self.assertFalse(SHIPMENT_POLICY.should_append(None, event(ShipmentStatus.EN_TRANSITO)))
        self.assertFalse(SALE_POLICY.should_append(None, event(SaleStatus.APROBADO)))

    def test_initial_status_accepts_anything(self):
        """Desde INICIAL se acepta cualquier estado, aun el mismo"""
        latest = event(ShipmentStatus.INICIAL, actor_id="7")
        self.assertTrue(SHIPMENT_POLICY.should_append(latest, event(ShipmentStatus.EN_TRANSITO)))
        self.assertTrue(SHIPMENT_POLICY.should_append(latest, event(ShipmentStatus.INICIAL)))

    def test_sale_open_statuses_accept(self):
        for status in (SaleStatus.PENDIENTE_DE_CARGA, SaleStatus.CREADO_DOCU_OK):
            latest = event(status, actor_id="7")
            self.assertTrue(SALE_POLICY.should_append(latest, event(SaleStatus.APROBADO)))

    def test_manual_status_is_never_overwritten(self):
        latest = event(ShipmentStatus.EN_TRANSITO, actor_id="7")
        self.assertFalse(SHIPMENT_POLICY.should_append(latest, event(ShipmentStatus.ENTREGADO)))
        self.assertFalse(SHIPMENT_POLICY.should_append(latest, event(ShipmentStatus.EN_TRANSITO)))

        latest = event(SaleStatus.EN_REVISION, actor_id="7")
        self.assertFalse(SALE_POLICY.should_append(latest, event(SaleStatus.APROBADO)))

    def test_automated_status_replaced_only_when_different(self):
        latest = event(ShipmentStatus.EN_TRANSITO)
        self.assertTrue(SHIPMENT_POLICY.should_append(latest, event(ShipmentStatus.ENTREGADO)))
        self.assertFalse(SHIPMENT_POLICY.should_append(latest, event(ShipmentStatus.EN_TRANSITO)))

    def test_proposed_manual_event_does_not_replace_automated(self):
        latest = event(SaleStatus.APROBADO)
        self.assertFalse(SALE_POLICY.should_append(latest, event(SaleStatus.RECHAZADO, actor_id="7")))


class RecordingGateway:
    """Gateway en memoria para verificar que consultas hace la conciliacion"""

    def __init__(self, shipments=(), sales=()):
        self.shipments = list(shipments)
        self.sales = list(sales)
        self.calls = []
        self.appended = []

    def fetch_all_shipments(self, page_size):
        self.calls.append(("fetch_all_shipments", page_size))
        return self.shipments[:page_size]

    def fetch_all_sales(self, page_size):
        self.calls.append(("fetch_all_sales", page_size))
        return self.sales[:page_size]

    def get_latest_shipment_event(self, shipment_key):
        return next(
            (e for e in reversed(self.appended) if getattr(e, "shipment_key", None) == shipment_key),
            None,
        )

    def get_latest_sale_event(self, sale_id):
        return next(
            (e for e in reversed(self.appended) if getattr(e, "sale_id", None) == sale_id),
            None,
        )

    def append_shipment_event(self, event):
        self.appended.append(event)
        return event

    def append_sale_event(self, event):
        self.appended.append(event)
        return event


class StatusGatewayContractTest(SimpleTestCase):
    def test_implementations_follow_protocol(self):
        self.assertIsInstance(DjangoStatusGateway(), StatusGateway)
        self.assertIsInstance(RecordingGateway(), StatusGateway)

    def test_missing_sale_column_skips_data_access(self):
        """Sin la columna SDS no se lee la tabla de ventas"""
        gateway = RecordingGateway()
        table = [["DESCRIPCION ESTADO"], ["APROBADO"]]

        with self.assertRaises(MissingColumnError):
            reconcile_sale_statuses(table, gateway=gateway)

        self.assertEqual(gateway.calls, [])
        self.assertEqual(gateway.appended, [])

    @override_settings(RECONCILIATION_SNAPSHOT_LIMIT=2)
    def test_snapshot_limit_from_settings(self):
        gateway = RecordingGateway()
        self.assertEqual(reconcile_shipment_statuses([SHIPMENT_HEADERS], gateway=gateway), 0)
        self.assertEqual(gateway.calls, [("fetch_all_shipments", 2)])

    def test_empty_table_raises(self):
        with self.assertRaises(EmptyTableError):
            reconcile_shipment_statuses([], gateway=RecordingGateway())


class ShipmentReconciliationTest(TestCase):
    def setUp(self):
        self.shipment = make_shipment("TRK1")
        ShipmentStatusEvent.objects.create(
            shipment_key="TRK1",
            shipment=self.shipment,
            status=ShipmentStatus.INICIAL,
            actor_id="1",
        )

    def _table(self, *rows):
        return [SHIPMENT_HEADERS, *[list(row) for row in rows]]

    def test_initial_status_is_replaced(self):
        """Un correo en INICIAL recibe el estado de la planilla"""
        table = self._table(["TRK1", "EN TRANSITO", "Salio de deposito", "Depot A"])

        count = reconcile_shipment_statuses(table)

        self.assertEqual(count, 1)
        latest = ShipmentStatusEvent.objects.filter(shipment_key="TRK1").order_by("-id").first()
        self.assertEqual(latest.status, ShipmentStatus.EN_TRANSITO)
        self.assertEqual(latest.description, "Salio de deposito")
        self.assertEqual(latest.location, "Depot A")
        self.assertEqual(latest.actor_id, AUTOMATED_ACTOR_ID)
        self.assertEqual(latest.shipment, self.shipment)
        self.assertTrue(latest.is_automated)

    def test_same_sheet_twice_is_idempotent(self):
        table = self._table(["TRK1", "EN TRANSITO", "Salio de deposito", "Depot A"])

        self.assertEqual(reconcile_shipment_statuses(table), 1)
        self.assertEqual(reconcile_shipment_statuses(table), 0)
        self.assertEqual(ShipmentStatusEvent.objects.filter(shipment_key="TRK1").count(), 2)

    def test_automated_status_advances(self):
        reconcile_shipment_statuses(self._table(["TRK1", "EN TRANSITO", "", ""]))
        count = reconcile_shipment_statuses(self._table(["TRK1", "ENTREGADO", "", ""]))

        self.assertEqual(count, 1)
        self.assertEqual(
            ShipmentStatusEvent.objects.filter(shipment_key="TRK1").order_by("-id").first().status,
            ShipmentStatus.ENTREGADO,
        )

    def test_manual_status_is_kept(self):
        """Un estado cargado a mano no se pisa"""
        ShipmentStatusEvent.objects.create(
            shipment_key="TRK1",
            shipment=self.shipment,
            status=ShipmentStatus.EN_TRANSITO,
            actor_id="42",
        )

        count = reconcile_shipment_statuses(self._table(["TRK1", "ENTREGADO", "", ""]))

        self.assertEqual(count, 0)
        self.assertEqual(ShipmentStatusEvent.objects.filter(shipment_key="TRK1").count(), 2)

    def test_manual_status_equal_to_proposed_is_kept(self):
        """Un estado manual igual al de la planilla tampoco se duplica"""
        ShipmentStatusEvent.objects.create(
            shipment_key="TRK1",
            shipment=self.shipment,
            status=ShipmentStatus.EN_TRANSITO,
            actor_id="42",
        )

        count = reconcile_shipment_statuses(self._table(["TRK1", "EN TRANSITO", "", ""]))

        self.assertEqual(count, 0)
        latest = ShipmentStatusEvent.objects.filter(shipment_key="TRK1").order_by("-id").first()
        self.assertEqual(latest.actor_id, "42")

    def test_shipment_without_history_is_skipped(self):
        make_shipment("TRK2")

        count = reconcile_shipment_statuses(self._table(["TRK2", "EN TRANSITO", "", ""]))

        self.assertEqual(count, 0)
        self.assertFalse(ShipmentStatusEvent.objects.filter(shipment_key="TRK2").exists())

    def test_unknown_rows_are_skipped(self):
        table = self._table(
            ["NOPE", "EN TRANSITO", "", ""],
            ["TRK1", "ESTADO INVENTADO", "", ""],
            ["TRK1"],
            ["TRK1", "EN TRANSITO", "", ""],
        )

        self.assertEqual(reconcile_shipment_statuses(table), 1)

    def test_shared_key_applies_to_each_shipment(self):
        """Una guia repetida agrega un estado por cada correo"""
        other = make_shipment("TRK1", recipient="Otro Cliente")

        count = reconcile_shipment_statuses(self._table(["TRK1", "INICIAL", "", ""]))

        self.assertEqual(count, 2)
        appended = ShipmentStatusEvent.objects.filter(
            shipment_key="TRK1", actor_id=AUTOMATED_ACTOR_ID,
        ).order_by("id")
        self.assertEqual(
            [(e.shipment_id, e.status) for e in appended],
            [(self.shipment.id, ShipmentStatus.INICIAL), (other.id, ShipmentStatus.INICIAL)],
        )

    def test_shared_key_rereads_latest_per_shipment(self):
        """Cada correo con la guia repetida ve el estado recien agregado"""
        make_shipment("TRK1", recipient="Otro Cliente")

        count = reconcile_shipment_statuses(self._table(["TRK1", "EN TRANSITO", "", ""]))

        # El segundo correo ya tiene EN TRANSITO automatico, igual al propuesto
        self.assertEqual(count, 1)

    def test_long_location_is_stored(self):
        location = "Centro de distribucion " * 20

        count = reconcile_shipment_statuses(self._table(["TRK1", "EN TRANSITO", "", location]))

        self.assertEqual(count, 1)
        latest = ShipmentStatusEvent.objects.filter(shipment_key="TRK1").order_by("-id").first()
        self.assertEqual(latest.location, location)

    def test_column_override(self):
        table = [
            ["Otro", "Estado Guia", "x", "y", "z", "Codigo"],
            ["TRK9", "EN TRANSITO", "", "", "", "TRK1"],
        ]

        self.assertEqual(reconcile_shipment_statuses(table, {"shipment_key": 5}), 1)

    def test_no_shipments_returns_zero(self):
        ShipmentStatusEvent.objects.all().delete()
        Shipment.objects.all().delete()

        count = reconcile_shipment_statuses(self._table(["TRK1", "EN TRANSITO", "", ""]))

        self.assertEqual(count, 0)


class SaleReconciliationTest(TestCase):
    def setUp(self):
        self.seller = User.objects.create_user(username="vendedor", password="testpass123")
        self.plan = make_plan()
        self.sale = Sale.objects.create(
            sds="S1", stl="STL1", customer="Cliente", seller=self.seller, plan=self.plan,
        )

    def _set_status(self, sale, status, actor_id="1"):
        return SaleStatusEvent.objects.create(sale=sale, status=status, actor_id=actor_id)

    def _latest(self, sale):
        return SaleStatusEvent.objects.filter(sale=sale).order_by("-id").first()

    def test_pending_sale_accepts_status(self):
        self._set_status(self.sale, SaleStatus.PENDIENTE_DE_CARGA)
        table = [SALE_HEADERS, ["S1", "APROBADO", ""]]

        self.assertEqual(reconcile_sale_statuses(table), 1)
        latest = self._latest(self.sale)
        self.assertEqual(latest.status, SaleStatus.APROBADO)
        self.assertEqual(latest.actor_id, AUTOMATED_ACTOR_ID)

    def test_documented_sale_accepts_status(self):
        self._set_status(self.sale, SaleStatus.CREADO_DOCU_OK)
        table = [SALE_HEADERS, ["S1", "RECHAZADO", "Documento ilegible"]]

        self.assertEqual(reconcile_sale_statuses(table), 1)
        self.assertEqual(self._latest(self.sale).description, "Documento ilegible")

    def test_manual_status_is_kept(self):
        self._set_status(self.sale, SaleStatus.EN_REVISION, actor_id="42")

        self.assertEqual(reconcile_sale_statuses([SALE_HEADERS, ["S1", "APROBADO", ""]]), 0)

    def test_same_sheet_twice_is_idempotent(self):
        self._set_status(self.sale, SaleStatus.PENDIENTE_DE_CARGA)
        table = [SALE_HEADERS, ["S1", "APROBADO", ""]]

        self.assertEqual(reconcile_sale_statuses(table), 1)
        self.assertEqual(reconcile_sale_statuses(table), 0)

    def test_padded_headers_are_matched(self):
        self._set_status(self.sale, SaleStatus.PENDIENTE_DE_CARGA)
        table = [[" SDS ", " DESCRIPCION ESTADO "], ["S1", "APROBADO"]]

        self.assertEqual(reconcile_sale_statuses(table), 1)

    def test_missing_sds_column_aborts(self):
        self._set_status(self.sale, SaleStatus.PENDIENTE_DE_CARGA)
        table = [["DESCRIPCION ESTADO"], ["APROBADO"]]

        with self.assertRaises(MissingColumnError):
            reconcile_sale_statuses(table)
        self.assertEqual(SaleStatusEvent.objects.count(), 1)

    def test_row_without_match_is_skipped(self):
        self._set_status(self.sale, SaleStatus.PENDIENTE_DE_CARGA)
        table = [SALE_HEADERS, ["S999", "APROBADO", ""], ["S1", "APROBADO", ""]]

        self.assertEqual(reconcile_sale_statuses(table), 1)

    def test_row_without_status_is_skipped(self):
        self._set_status(self.sale, SaleStatus.PENDIENTE_DE_CARGA)

        self.assertEqual(reconcile_sale_statuses([SALE_HEADERS, ["S1"]]), 0)

    def test_repeated_sds_uses_last_sale(self):
        """Con un SDS repetido solo la ultima venta recibe el estado"""
        other = Sale.objects.create(
            sds="S1", stl="STL2", customer="Otro", seller=self.seller, plan=self.plan,
        )
        self._set_status(self.sale, SaleStatus.PENDIENTE_DE_CARGA)
        self._set_status(other, SaleStatus.PENDIENTE_DE_CARGA)

        self.assertEqual(reconcile_sale_statuses([SALE_HEADERS, ["S1", "APROBADO", ""]]), 1)
        self.assertEqual(self._latest(other).status, SaleStatus.APROBADO)
        self.assertEqual(self._latest(self.sale).status, SaleStatus.PENDIENTE_DE_CARGA)


class ParseUploadedTableTest(SimpleTestCase):
    def test_parse_csv(self):
        upload = SimpleUploadedFile(
            "correo.csv",
            "Guia,Estado Guia\nTRK1,EN TRANSITO\nTRK2,\n".encode("utf-8"),
            content_type="text/csv",
        )

        table = parse_uploaded_table(upload)

        self.assertEqual(table, [["Guia", "Estado Guia"], ["TRK1", "EN TRANSITO"], ["TRK2", ""]])

    def test_parse_csv_with_extra_cells(self):
        """Una fila con mas celdas que el encabezado no invalida la planilla"""
        upload = SimpleUploadedFile(
            "correo.csv",
            b"Guia,Estado Guia\nTRK1,EN TRANSITO\nTRK2,ENTREGADO,extra\n",
        )

        table = parse_uploaded_table(upload)

        self.assertEqual(
            table,
            [
                ["Guia", "Estado Guia", ""],
                ["TRK1", "EN TRANSITO", ""],
                ["TRK2", "ENTREGADO", "extra"],
            ],
        )

    def test_parse_csv_drops_trailing_separators(self):
        upload = SimpleUploadedFile("ventas.csv", b"SDS;DESCRIPCION ESTADO\nS1;APROBADO;;\n")

        table = parse_uploaded_table(upload)

        self.assertEqual(table, [["SDS", "DESCRIPCION ESTADO"], ["S1", "APROBADO"]])

    def test_parse_semicolon_csv_with_bom(self):
        upload = SimpleUploadedFile(
            "ventas.csv",
            "\ufeffSDS;DESCRIPCION ESTADO\n00012;APROBADO\n".encode("utf-8"),
        )

        table = parse_uploaded_table(upload)

        # Los codigos se leen como texto, sin perder ceros a la izquierda
        self.assertEqual(table, [["SDS", "DESCRIPCION ESTADO"], ["00012", "APROBADO"]])

    def test_parse_excel(self):
        buffer = BytesIO()
        pd.DataFrame([["SDS", "DESCRIPCION ESTADO"], ["S1", "APROBADO"]]).to_excel(
            buffer, header=False, index=False, engine="openpyxl",
        )
        upload = SimpleUploadedFile("ventas.xlsx", buffer.getvalue())

        table = parse_uploaded_table(upload)

        self.assertEqual(table, [["SDS", "DESCRIPCION ESTADO"], ["S1", "APROBADO"]])

    def test_unsupported_extension(self):
        upload = SimpleUploadedFile("correo.pdf", b"%PDF-1.4")
        with self.assertRaises(UnsupportedFileError):
            parse_uploaded_table(upload)

    def test_empty_file(self):
        with self.assertRaises(UnsupportedFileError):
            parse_uploaded_table(SimpleUploadedFile("correo.csv", b""))

    def test_broken_excel(self):
        with self.assertRaises(UnsupportedFileError):
            parse_uploaded_table(SimpleUploadedFile("ventas.xlsx", b"no es un excel"))


class StatusServicesTest(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="backoffice", password="testpass123")
        self.plan = make_plan()

    def test_actor_id(self):
        self.assertEqual(actor_id_for(self.user), str(self.user.pk))
        self.assertEqual(actor_id_for(None), AUTOMATED_ACTOR_ID)

    def test_create_shipment_records_initial_status(self):
        shipment = create_shipment(
            {
                "sap_id": "TRK5",
                "recipient": "Cliente",
                "contact_phone": "099000000",
                "address": "Calle 1",
                "house_number": 10,
                "locality": "Salto",
                "department": "Salto",
                "postal_code": 50000,
            },
            user=self.user,
        )

        events = ShipmentStatusEvent.objects.filter(shipment_key="TRK5")
        self.assertEqual(events.count(), 1)
        self.assertEqual(events.first().status, ShipmentStatus.INICIAL)
        self.assertEqual(events.first().shipment, shipment)
        self.assertEqual(shipment.created_by, "backoffice")

    def test_create_sale_records_pending_status(self):
        sale = create_sale({"sds": "S7", "stl": "STL7", "customer": "Cliente", "plan": self.plan}, user=self.user)

        self.assertEqual(sale.seller, self.user)
        self.assertEqual(sale.current_status, SaleStatus.PENDIENTE_DE_CARGA)
        self.assertEqual(sale.status_events.first().actor_id, str(self.user.pk))

    def test_create_sale_without_seller_fails(self):
        with self.assertRaises(ValidationError):
            create_sale({"sds": "S8", "stl": "STL8", "customer": "Cliente", "plan": self.plan})

    def test_record_status_for_unknown_shipment_fails(self):
        with self.assertRaises(ValidationError) as context:
            record_shipment_status("NOPE", ShipmentStatus.ENTREGADO, user=self.user)
        self.assertIn("NOPE", str(context.exception))


class SetupRolesCommandTest(TestCase):
    def test_creates_every_role(self):
        out = StringIO()
        call_command("setup_roles", stdout=out, stderr=StringIO())

        self.assertEqual(set(Group.objects.values_list("name", flat=True)), set(ROLES))
        seller_group = Group.objects.get(name=ROLE_VENDEDOR)
        self.assertTrue(seller_group.permissions.filter(codename="add_sale").exists())
        self.assertFalse(seller_group.permissions.filter(codename="add_plan").exists())

    def test_is_idempotent(self):
        call_command("setup_roles", stdout=StringIO(), stderr=StringIO())
        call_command("setup_roles", stdout=StringIO(), stderr=StringIO())

        self.assertEqual(Group.objects.filter(name__in=ROLES).count(), len(ROLES))


class ReconciliationApiTest(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="backoffice", password="testpass123")
        self.user.groups.add(Group.objects.create(name=ROLE_BACK_OFFICE))
        self.client.force_authenticate(user=self.user)

        self.shipment = make_shipment("TRK1")
        ShipmentStatusEvent.objects.create(
            shipment_key="TRK1", shipment=self.shipment, status=ShipmentStatus.INICIAL, actor_id="1",
        )

        self.sale = Sale.objects.create(
            sds="S1", stl="STL1", customer="Cliente", seller=self.user, plan=make_plan(),
        )
        SaleStatusEvent.objects.create(sale=self.sale, status=SaleStatus.PENDIENTE_DE_CARGA, actor_id="1")

    def _csv(self, name, text):
        return SimpleUploadedFile(name, text.encode("utf-8"), content_type="text/csv")

    def test_shipment_upload_updates_statuses(self):
        upload = self._csv(
            "correo.csv",
            "Guia,Estado Guia,Ultimo Evento Nombre,Ubicacion\nTRK1,EN TRANSITO,Salio,Depot A\n",
        )

        response = self.client.post(reverse("actualizar-correo"), {"file": upload}, format="multipart")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["code"], "SHIPMENT_STATUSES_UPDATED")
        self.assertEqual(response.data["updated_count"], 1)
        self.assertEqual(response.data["detail"], "Se actualizaron 1 correos")

    def test_shipment_upload_with_ragged_rows(self):
        upload = self._csv(
            "correo.csv",
            "Guia,Estado Guia\nNOPE,ENTREGADO,,nota\nTRK1,EN TRANSITO\n",
        )

        response = self.client.post(reverse("actualizar-correo"), {"file": upload}, format="multipart")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["updated_count"], 1)

    def test_shipment_upload_with_column_override(self):
        upload = self._csv("correo.csv", "Codigo,Estado Guia\nTRK1,ENTREGADO\n")

        response = self.client.post(
            reverse("actualizar-correo"), {"file": upload, "guia": 0}, format="multipart",
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["updated_count"], 1)

    def test_sale_upload_updates_statuses(self):
        upload = self._csv("ventas.csv", "SDS;DESCRIPCION ESTADO\nS1;APROBADO\n")

        response = self.client.post(reverse("actualizar-estado-venta"), {"file": upload}, format="multipart")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["code"], "SALE_STATUSES_UPDATED")
        self.assertEqual(response.data["detail"], "Se actualizaron 1 estados de venta")
        self.assertEqual(self.sale.current_status, SaleStatus.APROBADO)

    def test_sale_upload_missing_required_column(self):
        upload = self._csv("ventas.csv", "DESCRIPCION ESTADO\nAPROBADO\n")

        response = self.client.post(reverse("actualizar-estado-venta"), {"file": upload}, format="multipart")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["code"], "MISSING_REQUIRED_COLUMN")
        self.assertEqual(response.data["updated_count"], 0)
        self.assertEqual(self.sale.current_status, SaleStatus.PENDIENTE_DE_CARGA)

    def test_upload_without_file(self):
        response = self.client.post(reverse("actualizar-correo"), {}, format="multipart")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["code"], "MISSING_FILE")

    def test_upload_unsupported_file(self):
        upload = SimpleUploadedFile("correo.pdf", b"%PDF-1.4")

        response = self.client.post(reverse("actualizar-correo"), {"file": upload}, format="multipart")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["code"], "UNSUPPORTED_FILE")

    @override_settings(RECONCILIATION_MAX_UPLOAD_MB=0)
    def test_upload_too_large(self):
        upload = self._csv("correo.csv", "Guia,Estado Guia\nTRK1,EN TRANSITO\n")

        response = self.client.post(reverse("actualizar-correo"), {"file": upload}, format="multipart")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["code"], "FILE_TOO_LARGE")

    def test_seller_cannot_reconcile(self):
        seller = User.objects.create_user(username="vendedor", password="testpass123")
        seller.groups.add(Group.objects.create(name=ROLE_VENDEDOR))
        self.client.force_authenticate(user=seller)
        upload = self._csv("correo.csv", "Guia,Estado Guia\nTRK1,EN TRANSITO\n")

        response = self.client.post(reverse("actualizar-correo"), {"file": upload}, format="multipart")

        self.assertEqual(response.status_code, 403)
        self.assertEqual(ShipmentStatusEvent.objects.count(), 1)

    def test_requires_authentication(self):
        self.client.force_authenticate(user=None)

        response = self.client.post(reverse("actualizar-correo"), {}, format="multipart")

        self.assertEqual(response.status_code, 401)


class BackOfficeApiTest(APITestCase):
    def setUp(self):
        self.supervisor = User.objects.create_user(username="supervisor", password="testpass123")
        self.supervisor.groups.add(Group.objects.create(name=ROLE_SUPERVISOR))
        self.seller = User.objects.create_user(username="vendedor", password="testpass123")
        self.seller.groups.add(Group.objects.create(name=ROLE_VENDEDOR))
        self.other_seller = User.objects.create_user(username="vendedor2", password="testpass123")
        self.plan = make_plan()

    def test_create_shipment_records_initial_status(self):
        self.client.force_authenticate(user=self.supervisor)
        payload = {
            "sap_id": " trk77 ",
            "recipient": "Cliente",
            "contact_phone": "099000000",
            "address": "Calle 1",
            "house_number": 10,
            "locality": "Salto",
            "department": "Salto",
            "postal_code": 50000,
        }

        response = self.client.post(reverse("shipments-list"), payload, format="json")

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["sap_id"], "TRK77")
        latest = self.client.get(f"{reverse('shipment-statuses-latest')}?shipment_key=TRK77")
        self.assertEqual(latest.status_code, 200)
        self.assertEqual(latest.data["status"], ShipmentStatus.INICIAL)

    def test_seller_cannot_create_shipment(self):
        self.client.force_authenticate(user=self.seller)

        response = self.client.post(reverse("shipments-list"), {"sap_id": "TRK1"}, format="json")

        self.assertEqual(response.status_code, 403)

    def test_latest_shipment_status_requires_key(self):
        self.client.force_authenticate(user=self.supervisor)

        response = self.client.get(reverse("shipment-statuses-latest"))

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["code"], "MISSING_SHIPMENT_KEY")

    def test_seller_creates_own_sale(self):
        """Un vendedor siempre carga la venta a su nombre"""
        self.client.force_authenticate(user=self.seller)
        payload = {
            "sds": "S10",
            "stl": "STL10",
            "customer": "Cliente",
            "plan": self.plan.id,
            "seller": self.other_seller.id,
        }

        response = self.client.post(reverse("sales-list"), payload, format="json")

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["seller"], self.seller.id)
        self.assertEqual(response.data["current_status"], SaleStatus.PENDIENTE_DE_CARGA)

    def test_seller_only_sees_own_sales(self):
        Sale.objects.create(sds="S1", stl="A", customer="C1", seller=self.seller, plan=self.plan)
        Sale.objects.create(sds="S2", stl="B", customer="C2", seller=self.other_seller, plan=self.plan)

        self.client.force_authenticate(user=self.seller)
        response = self.client.get(reverse("sales-list"))
        self.assertEqual(response.status_code, 200)
        self.assertEqual([item["sds"] for item in response.data["results"]], ["S1"])

        self.client.force_authenticate(user=self.supervisor)
        response = self.client.get(reverse("sales-list"))
        self.assertEqual(response.data["count"], 2)

    def test_manual_sale_status_is_signed_by_user(self):
        sale = create_sale({"sds": "S3", "stl": "C", "customer": "C3", "plan": self.plan}, user=self.seller)
        self.client.force_authenticate(user=self.supervisor)

        response = self.client.post(
            reverse("sale-statuses-list"),
            {"sale": sale.id, "status": SaleStatus.EN_REVISION, "description": "Control"},
            format="json",
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["actor_id"], str(self.supervisor.pk))
        self.assertFalse(response.data["is_automated"])

    def test_plan_write_requires_management(self):
        self.client.force_authenticate(user=self.seller)
        payload = {"name": "Plan 5GB", "price": "390.00", "gigabytes": 5, "calls": "100", "messages": "100"}

        response = self.client.post(reverse("plans-list"), payload, format="json")
        self.assertEqual(response.status_code, 403)

        self.client.force_authenticate(user=self.supervisor)
        response = self.client.post(reverse("plans-list"), payload, format="json")
        self.assertEqual(response.status_code, 201)

    def test_validation_error_contract(self):
        self.client.force_authenticate(user=self.supervisor)

        response = self.client.post(reverse("plans-list"), {"name": "Sin precio"}, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["code"], "VALIDATION_ERROR")
        self.assertIn("detail", response.data)
        self.assertTrue(response.data["errors"])
