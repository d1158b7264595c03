from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone


# Identificador con el que se registran los estados generados por importaciones
AUTOMATED_ACTOR_ID = "0000000000"


class ShipmentStatus(models.TextChoices):
    """Estados de guia informados por el correo"""

    INICIAL = "INICIAL", "Inicial"
    ASIGNADO = "ASIGNADO", "Asignado"
    DEVUELTO_AL_CLIENTE = "DEVUELTO AL CLIENTE", "Devuelto al cliente"
    EN_DEVOLUCION = "EN DEVOLUCION", "En devolucion"
    EN_TRANSITO = "EN TRANSITO", "En transito"
    ENTREGADO = "ENTREGADO", "Entregado"
    INGRESADO_CENTRO_LOGISTICO = (
        "INGRESADO CENTRO LOGISTICO - ECOMMERCE",
        "Ingresado centro logistico - ecommerce",
    )
    INGRESADO_EN_AGENCIA = "INGRESADO EN AGENCIA", "Ingresado en agencia"
    INGRESADO_PICK_UP_CENTER = "INGRESADO PICK UP CENTER UES", "Ingresado pick up center UES"
    NO_ENTREGADO = "NO ENTREGADO", "No entregado"
    PIEZA_EXTRAVIADA = "PIEZA EXTRAVIADA", "Pieza extraviada"
    RENDIDO_AL_CLIENTE = "RENDIDO AL CLIENTE", "Rendido al cliente"


class SaleStatus(models.TextChoices):
    """Estados del circuito de una venta"""

    PENDIENTE_DE_CARGA = "PENDIENTE_DE_CARGA", "Pendiente de carga"
    CREADO_SIN_DOCU = "CREADO_SIN_DOCU", "Creado sin documentacion"
    CREADO_DOCU_OK = "CREADO_DOCU_OK", "Creado con documentacion OK"
    EN_TRANSPORTE = "EN_TRANSPORTE", "En transporte"
    ENTREGADO = "ENTREGADO", "Entregado"
    PENDIENTE_DE_PIN = "PENDIENTE_DE_PIN", "Pendiente de PIN"
    CANCELADO = "CANCELADO", "Cancelado"
    REPACTAR = "REPACTAR", "Repactar"
    EN_REVISION = "EN_REVISION", "En revision"
    APROBADO = "APROBADO", "Aprobado"
    RECHAZADO = "RECHAZADO", "Rechazado"


class Plan(models.Model):
    """Plan de telefonia

    Attributes:
        name (CharField): Nombre comercial del plan
        price (DecimalField): Precio mensual
        gigabytes (PositiveIntegerField): Datos incluidos
        calls (CharField): Llamadas incluidas (ej. "ilimitadas", "500 min")
        messages (CharField): Mensajes incluidos (ej. "100 SMS")
        benefits (CharField): Beneficios adicionales (opcional)
    """

    name = models.CharField(max_length=45)
    price = models.DecimalField(max_digits=6, decimal_places=2)
    gigabytes = models.PositiveIntegerField()
    calls = models.CharField(max_length=45)
    messages = models.CharField(max_length=45)
    benefits = models.CharField(max_length=100, blank=True, null=True)
    active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name


class Promotion(models.Model):
    """Promocion aplicable a una venta

    Attributes:
        name (CharField): Nombre de la promocion
        percentage (DecimalField): Porcentaje de descuento (0 a 100)
        target_company (CharField): Empresa a la que va destinada
    """

    name = models.CharField(max_length=45)
    percentage = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        validators=[MinValueValidator(0), MaxValueValidator(100)],
    )
    target_company = models.CharField(max_length=45)
    active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} ({self.percentage}%)"


class Shipment(models.Model):
    """Correo (envio de chip) identificado por su guia SAP

    La guia no es unica: el sistema del correo puede repetirla y la
    conciliacion actua sobre todos los envios que la comparten.
    """

    sap_id = models.CharField(max_length=25, db_index=True)
    recipient = models.CharField(max_length=45)
    contact_phone = models.CharField(max_length=20)
    alternative_phone = models.CharField(max_length=20, blank=True, null=True)
    authorized_person = models.CharField(max_length=45, blank=True, null=True)
    address = models.CharField(max_length=75)
    house_number = models.PositiveIntegerField()
    between_streets = models.CharField(max_length=85, blank=True, null=True)
    neighborhood = models.CharField(max_length=45, blank=True, null=True)
    locality = models.CharField(max_length=45)
    department = models.CharField(max_length=45)
    postal_code = models.PositiveIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)
    deadline = models.DateTimeField(blank=True, null=True)
    created_by = models.CharField(max_length=50)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"Correo {self.sap_id} - {self.recipient}"


class ShipmentStatusEvent(models.Model):
    """Evento de estado de un correo (solo se agregan, nunca se modifican)

    Attributes:
        shipment_key (CharField): Guia SAP a la que pertenece el evento
        shipment (ForeignKey): Envio que recibio el evento (opcional)
        status (CharField): Estado de la guia
        description (TextField): Ultimo evento informado
        actor_id (CharField): Usuario que genero el evento, o AUTOMATED_ACTOR_ID
        location (TextField): Ubicacion actual
        created_at (DateTimeField): Fecha de creacion
    """

    shipment_key = models.CharField(max_length=25, db_index=True)
    shipment = models.ForeignKey(
        Shipment,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="status_events",
    )
    status = models.CharField(
        max_length=45,
        choices=ShipmentStatus.choices,
        default=ShipmentStatus.INICIAL,
    )
    description = models.TextField(blank=True, default="")
    actor_id = models.CharField(max_length=50)
    location = models.TextField(blank=True, default="PENDIENTE")
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-id"]

    def __str__(self):
        return f"{self.shipment_key} - {self.status}"

    @property
    def is_automated(self):
        return self.actor_id == AUTOMATED_ACTOR_ID


class Sale(models.Model):
    """Venta de linea

    Attributes:
        sds (CharField): Codigo de la venta en el sistema de ventas (SDS)
        stl (CharField): Codigo STL
        chip (CharField): Tipo de chip (sim / esim)
        customer (CharField): Cliente
        seller (ForeignKey): Vendedor
        back_office (ForeignKey): Usuario de back office asignado
        plan (ForeignKey): Plan contratado
        promotion (ForeignKey): Promocion aplicada (opcional)
        shipment_sap (CharField): Guia del correo asociado (opcional)
    """

    class Chip(models.TextChoices):
        SIM = "sim", "SIM"
        ESIM = "esim", "eSIM"

    sds = models.CharField(max_length=15, db_index=True)
    stl = models.CharField(max_length=20)
    chip = models.CharField(max_length=4, choices=Chip.choices, default=Chip.SIM)
    customer = models.CharField(max_length=100)
    seller = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="sales",
    )
    back_office = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="back_office_sales",
    )
    plan = models.ForeignKey(Plan, on_delete=models.PROTECT, related_name="sales")
    promotion = models.ForeignKey(
        Promotion,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="sales",
    )
    shipment_sap = models.CharField(max_length=25, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"Venta {self.sds} - {self.customer}"

    @property
    def current_status(self):
        latest = self.status_events.order_by("-id").first()
        return latest.status if latest else None


class SaleStatusEvent(models.Model):
    """Evento de estado de una venta (solo se agregan, nunca se modifican)"""

    sale = models.ForeignKey(Sale, on_delete=models.PROTECT, related_name="status_events")
    status = models.CharField(max_length=20, choices=SaleStatus.choices)
    description = models.TextField(blank=True, default="")
    actor_id = models.CharField(max_length=50)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-id"]

    def __str__(self):
        return f"Venta {self.sale_id} - {self.status}"

    @property
    def is_automated(self):
        return self.actor_id == AUTOMATED_ACTOR_ID
