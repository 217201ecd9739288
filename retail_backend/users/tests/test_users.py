from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

User = get_user_model()


class UserManagerTests(TestCase):
    def test_email_is_login_and_cashier_is_default_role(self):
        user = User.objects.create_user(email="Cashier@Example.com", password="pass")

        self.assertEqual(user.email, "Cashier@example.com")
        self.assertEqual(user.role, User.ROLE_CASHIER)
        self.assertTrue(user.check_password("pass"))

    def test_email_required(self):
        with self.assertRaises(ValueError):
            User.objects.create_user(email="", password="pass")

    def test_superuser_is_admin(self):
        admin = User.objects.create_superuser(email="root@example.com", password="pass")

        self.assertEqual(admin.role, User.ROLE_ADMIN)
        self.assertTrue(admin.is_staff)
        self.assertTrue(admin.is_superuser)


class MeViewTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(email="m@example.com", password="pass", role="manager")

    def test_me_returns_role(self):
        self.client.force_authenticate(user=self.user)

        res = self.client.get(reverse("auth-me"))

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.json()["role"], "manager")

    def test_jwt_login_by_email(self):
        res = self.client.post(
            reverse("jwt-create"),
            {"email": "m@example.com", "password": "pass"},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertIn("access", res.json())
