from fastapi.testclient import TestClient
import pytest


BORROW_REQUEST_URL = '/api/borrow_request'


@pytest.mark.unit
class TestBorrowRequestEndpoints:
    def test_borrow_scenario(
        self, client: TestClient, uow, student_headers: dict, admin_headers: dict
    ) -> None:
        """
        Given book 1 AVAILABLE
        When student 7 requests it twice and the administrator approves the first
        Then the second request conflicts and the book ends BORROWED
        """
        # Act
        first = client.post(BORROW_REQUEST_URL, json={'book_id': 1}, headers=student_headers)
        second = client.post(BORROW_REQUEST_URL, json={'book_id': 1}, headers=student_headers)
        decided = client.patch(
            f'{BORROW_REQUEST_URL}/{first.json()["id"]}',
            json={'status': 'APPROVED'},
            headers=admin_headers,
        )

        # Assert
        assert first.status_code == 201
        assert first.json()['status'] == 'PENDING'
        assert first.json()['requested_from_date'] == '2024-01-10'
        assert first.json()['requested_to_date'] == '2024-01-24'
        assert second.status_code == 409
        assert second.json()['detail'] == 'You already have a pending request for this book'
        assert decided.status_code == 200
        assert decided.json()['status'] == 'APPROVED'
        assert uow.book_repo.books[1].availability_status == 'BORROWED'

    def test_unavailable_book_returns_409(self, client: TestClient, student_headers: dict) -> None:
        response = client.post(BORROW_REQUEST_URL, json={'book_id': 2}, headers=student_headers)

        assert response.status_code == 409
        assert response.json()['detail'] == 'Book is not available for borrowing'

    def test_unknown_book_returns_404(self, client: TestClient, student_headers: dict) -> None:
        response = client.post(BORROW_REQUEST_URL, json={'book_id': 77}, headers=student_headers)

        assert response.status_code == 404

    def test_waitlisted_is_invalid_for_borrow(
        self, client: TestClient, student_headers: dict, admin_headers: dict
    ) -> None:
        created = client.post(BORROW_REQUEST_URL, json={'book_id': 1}, headers=student_headers)

        response = client.patch(
            f'{BORROW_REQUEST_URL}/{created.json()["id"]}',
            json={'status': 'WAITLISTED'},
            headers=admin_headers,
        )

        assert response.status_code == 400

    def test_lists(
        self,
        client: TestClient,
        student_headers: dict,
        another_student_headers: dict,
        admin_headers: dict,
    ) -> None:
        client.post(BORROW_REQUEST_URL, json={'book_id': 1}, headers=student_headers)
        client.post(BORROW_REQUEST_URL, json={'book_id': 1}, headers=another_student_headers)

        all_response = client.get(BORROW_REQUEST_URL, headers=admin_headers)
        mine = client.get(f'{BORROW_REQUEST_URL}/my', headers=another_student_headers)

        assert [r['id'] for r in all_response.json()] == [2, 1]
        assert [r['student_id'] for r in mine.json()] == [8]
        assert mine.json()[0]['book_title'] == 'Clean Code'

    def test_invalid_role_header_returns_401(self, client: TestClient) -> None:
        response = client.get(
            BORROW_REQUEST_URL, headers={'X-Actor-Id': '1', 'X-Actor-Role': 'LIBRARIAN'}
        )

        assert response.status_code == 401
