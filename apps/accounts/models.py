from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
import uuid


class CafeRole(models.TextChoices):
    ADMIN = 'admin', 'Admin'
    STAFF = 'staff', 'Staff'
    VIEWER = 'viewer', 'Viewer'


class UserManager(BaseUserManager):
    """Custom user manager for email-based authentication."""
    
    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('Email is required')
        
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user
    
    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('role', CafeRole.ADMIN)
        
        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')
        
        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """Café user: email login plus the café profile (café and role)."""
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, max_length=255, db_index=True)
    display_name = models.CharField(max_length=100, blank=True)
    
    # Café profile
    cafe = models.ForeignKey(
        'cafes.Cafe',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='members'
    )
    role = models.CharField(
        max_length=10,
        choices=CafeRole.choices,
        default=CafeRole.STAFF
    )
    
    # Permissions
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)
    
    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    last_login = models.DateTimeField(null=True, blank=True)
    
    objects = UserManager()
    
    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []
    
    class Meta:
        db_table = 'profiles'
        indexes = [
            models.Index(fields=['cafe', 'role'], name='profiles_cafe_role_idx'),
        ]
    
    def __str__(self):
        return self.email
    
    def get_display_name(self):
        """Return display name or email prefix."""
        return self.display_name or self.email.split('@')[0]

    def is_cafe_admin(self):
        return self.cafe_id is not None and self.role == CafeRole.ADMIN

    def can_operate_pos(self):
        """Admins and staff ring up orders and record expenditures."""
        return self.cafe_id is not None and self.role in (CafeRole.ADMIN, CafeRole.STAFF)
