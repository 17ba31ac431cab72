"""
Datos de ejemplo para un entorno nuevo

Solo inserta en tablas vacías, así que es seguro ejecutarlo en cada arranque.
"""
from sqlalchemy.orm import Session

from database import conexion
from models.catalogo import Destino, Experiencia
from models.hotel import Hotel
from models.sistema import Configuracion
from services.auditoria import registrar_log

_IMG = "https://images.unsplash.com/photo-{}?ixlib=rb-4.0.3&auto=format&fit=crop&w=600&q=80"

HOTELES = [
    {
        "name": "City Express Reynosa",
        "location": "Blvd. Morelos, Reynosa, Tamaulipas",
        "description": "Hotel con amenities modernas y ubicación estratégica en Reynosa. Ideal para viajes de negocios y placer.",
        "price": 850,
        "amenities": ["wifi", "alberca", "estacionamiento", "desayuno", "gimnasio"],
        "images": [_IMG.format("1564501049412-61c2a3083791"), _IMG.format("1584132967334-10e028bd69f7")],
        "videos": ["https://www.youtube.com/embed/VIDEO_ID_1"],
        "lat": 26.0800, "lng": -98.3000,
        "address": "Blvd. Morelos 123, Centro, Reynosa, Tamps.",
        "phone": "+52 899 123 4567",
        "email": "reservaciones@cityexpressreynosa.com",
    },
    {
        "name": "Holiday Inn Reynosa",
        "location": "Av. Hidalgo, Reynosa, Tamaulipas",
        "description": "Hotel de categoría internacional con servicio de primera y amenities exclusivas.",
        "price": 1200,
        "amenities": ["wifi", "alberca", "spa", "restaurante", "bar", "room service"],
        "images": [_IMG.format("1582719508461-905c673771fd"), _IMG.format("1566073771259-6a8506099945")],
        "videos": ["https://www.youtube.com/embed/VIDEO_ID_2"],
        "lat": 26.0600, "lng": -98.2900,
        "address": "Av. Hidalgo 456, Del Prado, Reynosa, Tamps.",
        "phone": "+52 899 234 5678",
        "email": "info@holidayinnreynosa.com",
    },
    {
        "name": "Fiesta Inn Reynosa",
        "location": "Col. Del Prado, Reynosa, Tamaulipas",
        "description": "Cadena hotelera reconocida con confort y servicio de calidad para toda la familia.",
        "price": 1100,
        "amenities": ["wifi", "alberca", "estacionamiento", "desayuno buffet", "centro de negocios"],
        "images": [_IMG.format("1542314831-068cd1dbfeeb"), _IMG.format("1564501049550-d6c5f2c352d1")],
        "videos": ["https://www.youtube.com/embed/VIDEO_ID_3"],
        "lat": 26.0700, "lng": -98.3100,
        "address": "Periférico 789, Del Prado, Reynosa, Tamps.",
        "phone": "+52 899 345 6789",
        "email": "reservas@fiestainnreynosa.com",
    },
    {
        "name": "Best Western Reynosa",
        "location": "Blvd. Los Virreyes, Reynosa, Tamaulipas",
        "description": "Hotel con estándares internacionales y atención personalizada para una estancia memorable.",
        "price": 950,
        "amenities": ["wifi", "alberca", "gimnasio", "bar", "room service", "business center"],
        "images": [_IMG.format("1590490360182-c33d57733427"), _IMG.format("1551882547-ff40c63fe5fa")],
        "videos": ["https://www.youtube.com/embed/VIDEO_ID_4"],
        "lat": 26.0750, "lng": -98.2950,
        "address": "Blvd. Los Virreyes 321, Reynosa, Tamps.",
        "phone": "+52 899 456 7890",
        "email": "contacto@bestwesternreynosa.com",
    },
    {
        "name": "Hotel San Carlos",
        "location": "Centro Histórico, Reynosa, Tamaulipas",
        "description": "Hotel familiar con tradición y servicio cálido en el corazón de Reynosa.",
        "price": 700,
        "amenities": ["wifi", "estacionamiento", "restaurante", "room service"],
        "images": [_IMG.format("1578683010236-d716f9a3f461"), _IMG.format("1599619585752-c3f01dd27e2c")],
        "videos": ["https://www.youtube.com/embed/VIDEO_ID_5"],
        "lat": 26.0650, "lng": -98.3050,
        "address": "Calle Juárez 654, Centro, Reynosa, Tamps.",
        "phone": "+52 899 567 8901",
        "email": "hotelsancarlos@example.com",
    },
]

CONFIGURACIONES = [
    ("site_name", "VBDHOTEL", "Nombre del sitio web"),
    ("max_reservation_days", 365, "Máximo de días para reservar con anticipación"),
    ("cancellation_hours", 24, "Horas mínimas para cancelar sin penalización"),
    ("email_notifications", True, "Enviar notificaciones por email"),
]

DESTINOS = [
    {
        "name": "Reynosa, Tamaulipas",
        "description": "Ciudad fronteriza vibrante con rica historia y excelente ubicación para negocios y turismo.",
        "state": "Tamaulipas", "city": "Reynosa",
        "images": [_IMG.format("1512453979798-5ea266f8880c"), _IMG.format("1449824913935-59a10b8d2000")],
        "lat": 26.0800, "lng": -98.3000,
        "attractions": ["Plaza Principal", "Puente Internacional", "Mercado Juárez", "Museo de Historia"],
        "best_time_to_visit": "Octubre a Marzo",
        "average_temperature": "22°C - 35°C",
        "popular_with": ["business", "families"],
        "tags": ["frontera", "negocios", "comercio"],
    },
    {
        "name": "Matamoros, Tamaulipas",
        "description": "Puerto histórico con arquitectura colonial y tradiciones culturales únicas.",
        "state": "Tamaulipas", "city": "Matamoros",
        "images": [_IMG.format("1518638150340-f706e86654de")],
        "lat": 25.8756, "lng": -97.5047,
        "attractions": ["Centro Histórico", "Teatro Reforma", "Casa Mata", "Playa Bagdad"],
        "best_time_to_visit": "Noviembre a Abril",
        "average_temperature": "20°C - 32°C",
        "popular_with": ["cultural", "families"],
        "tags": ["historia", "cultura", "playa"],
    },
    {
        "name": "Tampico, Tamaulipas",
        "description": "Puerto petrolero con hermosas playas y arquitectura art déco.",
        "state": "Tamaulipas", "city": "Tampico",
        "images": [_IMG.format("1507003211169-0a1dd7228f2d")],
        "lat": 22.2666, "lng": -97.8667,
        "attractions": ["Playa Miramar", "Centro Histórico", "Laguna del Carpintero", "Museo de la Cultura Huasteca"],
        "best_time_to_visit": "Diciembre a Mayo",
        "average_temperature": "25°C - 38°C",
        "popular_with": ["beach", "families", "couples"],
        "tags": ["playa", "petróleo", "arquitectura"],
    },
]

EXPERIENCIAS = [
    {
        "title": "Tour Gastronómico por Reynosa",
        "description": "Descubre los sabores auténticos de la frontera con un recorrido por los mejores restaurantes locales.",
        "category": "gastronomic", "location": "Reynosa, Tamaulipas", "duration": "4 horas", "price": 850,
        "images": [_IMG.format("1414235077428-338989a2e8c0")],
        "includes": ["Guía especializado", "Comida en 5 restaurantes", "Transporte"],
        "requirements": ["Identificación oficial"],
        "difficulty": "easy", "max_participants": 12, "min_age": 12, "rating": 4.5,
    },
    {
        "title": "Aventura en Río Bravo",
        "description": "Experiencia de rafting y pesca en las aguas del Río Bravo con guías expertos.",
        "category": "adventure", "location": "Río Bravo, Reynosa", "duration": "6 horas", "price": 1200,
        "images": [_IMG.format("1544551763-46a013bb70d5")],
        "includes": ["Equipo de seguridad", "Guía certificado", "Almuerzo", "Transporte"],
        "requirements": ["Saber nadar", "Estado físico básico"],
        "difficulty": "moderate", "max_participants": 8, "min_age": 16, "rating": 4.7,
    },
    {
        "title": "Centro Histórico y Cultura Local",
        "description": "Recorrido cultural por los sitios más emblemáticos de Reynosa y su rica historia fronteriza.",
        "category": "cultural", "location": "Centro de Reynosa", "duration": "3 horas", "price": 450,
        "images": [_IMG.format("1539650116574-75c0c6d73f6b")],
        "includes": ["Guía cultural", "Entradas a museos", "Degustación tradicional"],
        "requirements": ["Ninguno"],
        "difficulty": "easy", "max_participants": 20, "min_age": 8, "rating": 4.2,
    },
    {
        "title": "Spa y Relajación Fronteriza",
        "description": "Experiencia de wellness con tratamientos tradicionales y modernos en el mejor spa de la región.",
        "category": "wellness", "location": "Hotel Spa Reynosa", "duration": "5 horas", "price": 1800,
        "images": [_IMG.format("1544161515-4ab6ce6db874")],
        "includes": ["Masaje completo", "Facial", "Acceso a instalaciones", "Refrigerios"],
        "requirements": ["Reserva con 24h de anticipación"],
        "difficulty": "easy", "max_participants": 6, "min_age": 18, "rating": 4.8,
    },
    {
        "title": "Tour de Negocios y Networking",
        "description": "Recorrido por las principales zonas comerciales e industriales con oportunidades de networking.",
        "category": "business", "location": "Zona Industrial Reynosa", "duration": "8 horas", "price": 2500,
        "images": [_IMG.format("1507003211169-0a1dd7228f2d")],
        "includes": ["Transporte ejecutivo", "Almuerzo de negocios", "Traductor", "Material informativo"],
        "requirements": ["Vestimenta formal", "Identificación oficial"],
        "difficulty": "easy", "max_participants": 15, "min_age": 21, "rating": 4.4,
    },
]


def _sembrar(db: Session, modelo, registros) -> int:
    if db.query(modelo).count():
        return 0
    db.add_all(modelo(**datos) for datos in registros)
    return len(registros)


def insertar_datos_ejemplo(db: Session = None) -> None:
    propia = db is None
    if propia:
        db = conexion.SessionLocal()
    try:
        insertados = {
            "hoteles": _sembrar(db, Hotel, HOTELES),
            "destinos": _sembrar(db, Destino, DESTINOS),
            "experiencias": _sembrar(db, Experiencia, EXPERIENCIAS),
        }
        if not db.query(Configuracion).count():
            db.add_all(
                Configuracion(key=key, value=value, description=descripcion)
                for key, value, descripcion in CONFIGURACIONES
            )
            insertados["configuraciones"] = len(CONFIGURACIONES)
        db.commit()

        if any(insertados.values()):
            registrar_log("info", "Datos de ejemplo insertados correctamente", None, "system_init", insertados)
    except Exception as e:
        db.rollback()
        registrar_log("error", "Error insertando datos de ejemplo", None, "system_init", {"error": str(e)})
    finally:
        if propia:
            db.close()
