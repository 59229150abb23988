from django.urls import reverse
from rest_framework.test import APITestCase
from rest_framework import status
from apps.accounts.models import User


class TestAccountsAPI(APITestCase):

    def setUp(self):

        # URLs
        self.register_url = reverse("accounts:register")
        self.login_url = reverse("jwt_login")
        self.me_url = reverse("accounts:me")

        # Test User
        self.user_data = {
            "email": "user@test.com",
            "name": "Test User",
            "password": "StrongPass123!",
            "password_confirm": "StrongPass123!",
        }
        self.credentials = {
            "email": "user@test.com",
            "password": "StrongPass123!",
        }

    # ======================================================
    # REGISTER TESTS
    # ======================================================

    def test_register_success(self):

        response = self.client.post(self.register_url, self.user_data)

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data["success"])
        self.assertEqual(response.data["user"]["name"], "Test User")
        self.assertTrue(User.objects.filter(email="user@test.com").exists())

    def test_register_duplicate_email(self):

        self.client.post(self.register_url, self.user_data)

        response = self.client.post(self.register_url, self.user_data)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data["success"])
        self.assertIn("error", response.data)

    def test_register_missing_password(self):

        response = self.client.post(self.register_url, {
            "email": "nopass@test.com",
            "name": "No Pass",
        })

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_register_password_mismatch(self):

        data = dict(self.user_data, password_confirm="Different123!")
        response = self.client.post(self.register_url, data)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Passwords do not match")

    # ======================================================
    # JWT LOGIN TESTS
    # ======================================================

    def test_jwt_login_success(self):

        self.client.post(self.register_url, self.user_data)

        response = self.client.post(self.login_url, self.credentials)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["success"])
        self.assertIn("access", response.data)
        self.assertIn("refresh", response.data)
        self.assertEqual(response.data["user"]["email"], "user@test.com")

    def test_login_wrong_password(self):

        self.client.post(self.register_url, self.user_data)

        response = self.client.post(self.login_url, {
            "email": "user@test.com",
            "password": "WrongPassword123"
        })

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(response.data["success"])

    def test_login_non_existing_user(self):

        response = self.client.post(self.login_url, {
            "email": "ghost@test.com",
            "password": "123456"
        })

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    # ======================================================
    # PROFILE TESTS
    # ======================================================

    def test_me_requires_authentication(self):

        response = self.client.get(self.me_url)

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_me_with_bearer_token(self):

        self.client.post(self.register_url, self.user_data)
        login = self.client.post(self.login_url, self.credentials)

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['access']}")
        response = self.client.get(self.me_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["user"]["email"], "user@test.com")
        self.assertEqual(response.data["user"]["role"], User.Role.MEMBER)

    # ======================================================
    # MANAGER TESTS
    # ======================================================

    def test_create_user_defaults_name_from_email(self):

        user = User.objects.create_user("Sam@Example.COM", password="StrongPass123!")

        self.assertEqual(user.email, "Sam@example.com")
        self.assertEqual(user.name, "Sam")
        self.assertEqual(user.role, User.Role.MEMBER)
        self.assertTrue(user.check_password("StrongPass123!"))

    def test_create_user_requires_email(self):

        with self.assertRaises(ValueError):
            User.objects.create_user("", password="StrongPass123!")

    def test_create_superuser_is_admin(self):

        admin = User.objects.create_superuser("admin@test.com", password="StrongPass123!", is_staff=False)

        self.assertTrue(admin.is_staff)
        self.assertTrue(admin.is_superuser)
        self.assertEqual(admin.role, User.Role.ADMIN)
