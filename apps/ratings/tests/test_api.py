import pytest
from uuid import uuid4
from django.urls import reverse
from rest_framework import status
from apps.ratings.models import Rating


def _detail(rating_id):
    return reverse('ratings:rating-detail', kwargs={'pk': rating_id})


# =============================================================================
# Rating Submission
# =============================================================================

@pytest.mark.django_db
class TestRatingCreate:
    """Tests for POST /api/ratings/"""

    def test_create_rating(self, rating_auth_client, rating_user, rated_store):
        response = rating_auth_client.post(
            reverse('ratings:rating-list'),
            {'store_id': str(rated_store.id), 'value': 5},
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['value'] == 5
        assert response.data['user']['id'] == str(rating_user.id)
        assert response.data['store']['id'] == str(rated_store.id)

    def test_create_requires_authentication(self, api_client, rated_store):
        response = api_client.post(
            reverse('ratings:rating-list'),
            {'store_id': str(rated_store.id), 'value': 5},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_create_duplicate(self, rating_auth_client, rating, rated_store):
        response = rating_auth_client.post(
            reverse('ratings:rating-list'),
            {'store_id': str(rated_store.id), 'value': 1},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'already rated' in response.data['error']
        assert Rating.objects.count() == 1

    @pytest.mark.parametrize('value', [0, 6, 'five', 2.5])
    def test_create_invalid_value(self, rating_auth_client, rated_store, value):
        response = rating_auth_client.post(
            reverse('ratings:rating-list'),
            {'store_id': str(rated_store.id), 'value': value},
            format='json',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert Rating.objects.count() == 0

    def test_create_unknown_store(self, rating_auth_client):
        response = rating_auth_client.post(
            reverse('ratings:rating-list'),
            {'store_id': str(uuid4()), 'value': 3},
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error'] == 'Store not found'


# =============================================================================
# Rating Update / Delete
# =============================================================================

@pytest.mark.django_db
class TestRatingModify:
    """Tests for PUT/PATCH/DELETE /api/ratings/{id}/"""

    def test_update_own_rating(self, rating_auth_client, rating):
        response = rating_auth_client.put(_detail(rating.id), {'value': 2})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['value'] == 2

    def test_patch_own_rating(self, rating_auth_client, rating):
        response = rating_auth_client.patch(_detail(rating.id), {'value': 3})

        assert response.status_code == status.HTTP_200_OK
        rating.refresh_from_db()
        assert rating.value == 3

    def test_update_other_users_rating(self, rating_other_client, rating):
        response = rating_other_client.put(_detail(rating.id), {'value': 1})

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['error'] == 'You can only update your own ratings'

    def test_update_not_found(self, rating_auth_client):
        response = rating_auth_client.put(_detail(uuid4()), {'value': 1})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_update_malformed_id(self, rating_auth_client, rating):
        response = rating_auth_client.put('/api/ratings/' + '-' * 36 + '/', {'value': 1})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        rating.refresh_from_db()
        assert rating.value == 4

    def test_update_uppercase_id(self, rating_auth_client, rating):
        response = rating_auth_client.put(f'/api/ratings/{str(rating.id).upper()}/', {'value': 2})

        assert response.status_code == status.HTTP_200_OK
        rating.refresh_from_db()
        assert rating.value == 2

    def test_delete_own_rating(self, rating_auth_client, rating):
        response = rating_auth_client.delete(_detail(rating.id))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Rating.objects.filter(id=rating.id).exists()

    def test_delete_other_users_rating(self, rating_other_client, rating):
        response = rating_other_client.delete(_detail(rating.id))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert Rating.objects.filter(id=rating.id).exists()


# =============================================================================
# Rating Lookups
# =============================================================================

@pytest.mark.django_db
class TestRatingLookups:
    """Listing and per-store / per-user lookups."""

    def test_admin_lists_all_ratings(self, admin_auth_client, rating):
        response = admin_auth_client.get(reverse('ratings:rating-list'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1
        assert response.data['results'][0]['store']['name'] == rating.store.name

    def test_admin_list_filter_by_value(self, admin_auth_client, rating):
        response = admin_auth_client.get(reverse('ratings:rating-list'), {'value': 1})

        assert response.data['count'] == 0

    def test_normal_user_cannot_list_all(self, rating_auth_client, rating):
        response = rating_auth_client.get(reverse('ratings:rating-list'))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_store_ratings_public(self, api_client, rating, rated_store):
        url = reverse('ratings:store-ratings', kwargs={'store_id': rated_store.id})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1
        assert response.data[0]['user']['name'] == 'Regular Rater Account'

    def test_store_ratings_unknown_store(self, api_client):
        url = reverse('ratings:store-ratings', kwargs={'store_id': uuid4()})
        response = api_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_user_store_rating_self(self, rating_auth_client, rating, rating_user, rated_store):
        url = reverse(
            'ratings:user-store-rating',
            kwargs={'user_id': rating_user.id, 'store_id': rated_store.id},
        )
        response = rating_auth_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['value'] == 4

    def test_user_store_rating_other_user_forbidden(self, rating_other_client, rating, rating_user, rated_store):
        url = reverse(
            'ratings:user-store-rating',
            kwargs={'user_id': rating_user.id, 'store_id': rated_store.id},
        )
        response = rating_other_client.get(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_user_store_rating_admin(self, admin_auth_client, rating, rating_user, rated_store):
        url = reverse(
            'ratings:user-store-rating',
            kwargs={'user_id': rating_user.id, 'store_id': rated_store.id},
        )
        response = admin_auth_client.get(url)

        assert response.status_code == status.HTTP_200_OK

    def test_user_store_rating_not_rated(self, rating_auth_client, rating_user, other_store):
        url = reverse(
            'ratings:user-store-rating',
            kwargs={'user_id': rating_user.id, 'store_id': other_store.id},
        )
        response = rating_auth_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error'] == 'Rating not found'
