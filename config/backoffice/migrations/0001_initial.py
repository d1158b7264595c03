import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Plan",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=45)),
                ("price", models.DecimalField(decimal_places=2, max_digits=6)),
                ("gigabytes", models.PositiveIntegerField()),
                ("calls", models.CharField(max_length=45)),
                ("messages", models.CharField(max_length=45)),
                ("benefits", models.CharField(blank=True, max_length=100, null=True)),
                ("active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Promotion",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=45)),
                (
                    "percentage",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=5,
                        validators=[
                            django.core.validators.MinValueValidator(0),
                            django.core.validators.MaxValueValidator(100),
                        ],
                    ),
                ),
                ("target_company", models.CharField(max_length=45)),
                ("active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Shipment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("sap_id", models.CharField(db_index=True, max_length=25)),
                ("recipient", models.CharField(max_length=45)),
                ("contact_phone", models.CharField(max_length=20)),
                ("alternative_phone", models.CharField(blank=True, max_length=20, null=True)),
                ("authorized_person", models.CharField(blank=True, max_length=45, null=True)),
                ("address", models.CharField(max_length=75)),
                ("house_number", models.PositiveIntegerField()),
                ("between_streets", models.CharField(blank=True, max_length=85, null=True)),
                ("neighborhood", models.CharField(blank=True, max_length=45, null=True)),
                ("locality", models.CharField(max_length=45)),
                ("department", models.CharField(max_length=45)),
                ("postal_code", models.PositiveIntegerField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("deadline", models.DateTimeField(blank=True, null=True)),
                ("created_by", models.CharField(max_length=50)),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="ShipmentStatusEvent",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("shipment_key", models.CharField(db_index=True, max_length=25)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("INICIAL", "Inicial"),
                            ("ASIGNADO", "Asignado"),
                            ("DEVUELTO AL CLIENTE", "Devuelto al cliente"),
                            ("EN DEVOLUCION", "En devolucion"),
                            ("EN TRANSITO", "En transito"),
                            ("ENTREGADO", "Entregado"),
                            ("INGRESADO CENTRO LOGISTICO - ECOMMERCE", "Ingresado centro logistico - ecommerce"),
                            ("INGRESADO EN AGENCIA", "Ingresado en agencia"),
                            ("INGRESADO PICK UP CENTER UES", "Ingresado pick up center UES"),
                            ("NO ENTREGADO", "No entregado"),
                            ("PIEZA EXTRAVIADA", "Pieza extraviada"),
                            ("RENDIDO AL CLIENTE", "Rendido al cliente"),
                        ],
                        default="INICIAL",
                        max_length=45,
                    ),
                ),
                ("description", models.TextField(blank=True, default="")),
                ("actor_id", models.CharField(max_length=50)),
                ("location", models.TextField(blank=True, default="PENDIENTE")),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "shipment",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="status_events",
                        to="backoffice.shipment",
                    ),
                ),
            ],
            options={
                "ordering": ["-id"],
            },
        ),
        migrations.CreateModel(
            name="Sale",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("sds", models.CharField(db_index=True, max_length=15)),
                ("stl", models.CharField(max_length=20)),
                (
                    "chip",
                    models.CharField(choices=[("sim", "SIM"), ("esim", "eSIM")], default="sim", max_length=4),
                ),
                ("customer", models.CharField(max_length=100)),
                ("shipment_sap", models.CharField(blank=True, max_length=25, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "back_office",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="back_office_sales",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "plan",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="sales",
                        to="backoffice.plan",
                    ),
                ),
                (
                    "promotion",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="sales",
                        to="backoffice.promotion",
                    ),
                ),
                (
                    "seller",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="sales",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="SaleStatusEvent",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("PENDIENTE_DE_CARGA", "Pendiente de carga"),
                            ("CREADO_SIN_DOCU", "Creado sin documentacion"),
                            ("CREADO_DOCU_OK", "Creado con documentacion OK"),
                            ("EN_TRANSPORTE", "En transporte"),
                            ("ENTREGADO", "Entregado"),
                            ("PENDIENTE_DE_PIN", "Pendiente de PIN"),
                            ("CANCELADO", "Cancelado"),
                            ("REPACTAR", "Repactar"),
                            ("EN_REVISION", "En revision"),
                            ("APROBADO", "Aprobado"),
                            ("RECHAZADO", "Rechazado"),
                        ],
                        max_length=20,
                    ),
                ),
                ("description", models.TextField(blank=True, default="")),
                ("actor_id", models.CharField(max_length=50)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "sale",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="status_events",
                        to="backoffice.sale",
                    ),
                ),
            ],
            options={
                "ordering": ["-id"],
            },
        ),
    ]
