from django.contrib import admin

from .models import Friendship, SocialComment, SocialLike, SocialPost


@admin.register(Friendship)
class FriendshipAdmin(admin.ModelAdmin):
    list_display = ("id", "requester", "addressee", "status", "created_at")
    list_filter = ("status",)
    search_fields = ("requester__email", "addressee__email")


@admin.register(SocialPost)
class SocialPostAdmin(admin.ModelAdmin):
    list_display = ("id", "author", "event", "created_at")
    search_fields = ("content", "author__email")


@admin.register(SocialComment)
class SocialCommentAdmin(admin.ModelAdmin):
    list_display = ("id", "post", "author", "created_at")


@admin.register(SocialLike)
class SocialLikeAdmin(admin.ModelAdmin):
    list_display = ("id", "post", "user", "created_at")
