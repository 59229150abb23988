from django.contrib.auth.base_user import BaseUserManager


class UserManager(BaseUserManager):
    """
    Manager for email login. Display name defaults to the email's local part.
    """

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError("Email is required")

        email = self.normalize_email(email)
        extra_fields.setdefault("name", email.split("@")[0])

        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        # Used by createsuperuser; superusers manage the team as admins
        extra_fields.update(is_staff=True, is_superuser=True, role=self.model.Role.ADMIN)
        return self.create_user(email, password, **extra_fields)
