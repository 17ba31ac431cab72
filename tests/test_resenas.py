"""
Tests de reseñas y rating agregado (hoteles, destinos y experiencias)
"""
from models.catalogo import Destino, Experiencia
from services.resenas import recalcular_rating


class TestRecalcularRating:

    def test_promedio_simple(self):
        assert recalcular_rating([4, 5]) == 4.5

    def test_redondeo_a_un_decimal(self):
        assert recalcular_rating([4, 4, 5]) == 4.3

    def test_mitad_hacia_arriba(self):
        assert recalcular_rating([4, 5, 5, 5]) == 4.8

    def test_sin_resenas(self):
        assert recalcular_rating([]) == 0


class TestResenasHotel:

    def test_dos_usuarios_promedian(self, client, usuario, otro_usuario, hotel):
        client.post(f"/api/hotels/{hotel.id}/reviews", json={"rating": 4, "comment": "Bien"}, headers=usuario["headers"])
        response = client.post(
            f"/api/hotels/{hotel.id}/reviews", json={"rating": 5, "comment": "Excelente"},
            headers=otro_usuario["headers"],
        )
        assert response.status_code == 200
        data = response.json()["hotel"]
        assert data["rating"] == 4.5
        assert [r["userName"] for r in data["reviews"]] == ["Ana López", "Beto Ruiz"]

    def test_resena_duplicada(self, client, usuario, hotel):
        client.post(f"/api/hotels/{hotel.id}/reviews", json={"rating": 4}, headers=usuario["headers"])
        response = client.post(f"/api/hotels/{hotel.id}/reviews", json={"rating": 2}, headers=usuario["headers"])
        assert response.status_code == 400
        assert response.json() == {"error": "Ya has hecho una reseña para este hotel"}

        detalle = client.get(f"/api/hotels/{hotel.id}").json()
        assert detalle["rating"] == 4
        assert len(detalle["reviews"]) == 1

    def test_rating_fuera_de_rango(self, client, usuario, hotel):
        for rating in (0, 6, None):
            response = client.post(f"/api/hotels/{hotel.id}/reviews", json={"rating": rating}, headers=usuario["headers"])
            assert response.status_code == 400
            assert response.json() == {"error": "El rating debe estar entre 1 y 5"}

    def test_hotel_inexistente(self, client, usuario):
        response = client.post("/api/hotels/999/reviews", json={"rating": 5}, headers=usuario["headers"])
        assert response.status_code == 404

    def test_requiere_autenticacion(self, client, hotel):
        response = client.post(f"/api/hotels/{hotel.id}/reviews", json={"rating": 5})
        assert response.status_code == 401


class TestResenasCatalogo:

    def test_resena_de_destino(self, client, db, usuario, otro_usuario):
        destino = Destino(name="Tampico, Tamaulipas", state="Tamaulipas")
        db.add(destino)
        db.commit()

        client.post(f"/api/destinations/{destino.id}/reviews", json={"rating": 3}, headers=usuario["headers"])
        response = client.post(
            f"/api/destinations/{destino.id}/reviews", json={"rating": 4}, headers=otro_usuario["headers"]
        )
        assert response.status_code == 200
        assert response.json()["destination"]["rating"] == 3.5

    def test_resena_de_experiencia_duplicada(self, client, db, usuario):
        experiencia = Experiencia(title="Aventura en Río Bravo", category="adventure", price=1200)
        db.add(experiencia)
        db.commit()

        primera = client.post(
            f"/api/experiences/{experiencia.id}/reviews", json={"rating": 5}, headers=usuario["headers"]
        )
        assert primera.json()["experience"]["rating"] == 5
        segunda = client.post(
            f"/api/experiences/{experiencia.id}/reviews", json={"rating": 1}, headers=usuario["headers"]
        )
        assert segunda.status_code == 400
        assert segunda.json() == {"error": "Ya has hecho una reseña para esta experiencia"}
