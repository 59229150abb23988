"""
Direct message URL patterns.
"""
from django.urls import path
from apps.direct_messages import views

app_name = 'direct_messages'

urlpatterns = [
    path('users/', views.UserListView.as_view(), name='users'),
    path('conversations/', views.ConversationListView.as_view(), name='conversations'),

    # Must come before the single-message delete route
    path('clear/<int:user_id>/', views.ClearConversationView.as_view(), name='clear'),

    # Thread with a user
    path('<int:user_id>/', views.ThreadView.as_view(), name='thread'),
    path('<int:user_id>/read/', views.MarkReadView.as_view(), name='mark-read'),

    # Single message
    path('<uuid:message_id>/', views.MessageDeleteView.as_view(), name='delete'),
]
