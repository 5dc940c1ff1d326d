#!/usr/bin/env python3
"""
Basic test script to check if the Django setup is working correctly.
Run this with: python test_basic.py
"""

import os
import sys
import django

# Setup Django
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'projecthub.settings')
django.setup()

def test_imports():
    """Test that all models can be imported successfully"""
    try:
        from accounts.models import User
        from project.models import Project, ProjectMember
        from hackathon.models import Hackathon, HackathonMember, HackathonProject
        print("✅ All model imports successful")
        return True
    except ImportError as e:
        print(f"❌ Model import failed: {e}")
        return False

def test_serializers():
    """Test that all serializers can be imported successfully"""
    try:
        from accounts.serializers import ProfileSerializer, LogoutSerializer
        from team.serializers import MemberSerializer, AddMemberSerializer, UpdateMemberRoleSerializer
        from project.serializers import ProjectSerializer
        from hackathon.serializers import HackathonSerializer, LinkProjectSerializer
        from reports.serializers import UserStatsSerializer
        print("✅ All serializer imports successful")
        return True
    except ImportError as e:
        print(f"❌ Serializer import failed: {e}")
        return False

def test_views():
    """Test that all views can be imported successfully"""
    try:
        from accounts.views import MeView, ProfileListView, LogoutView
        from project.views import ProjectViewSet
        from hackathon.views import HackathonViewSet
        from reports.views import UserStatsView, UserReportDownloadView
        from realtime.consumers import ChangeFeedConsumer
        print("✅ All view imports successful")
        return True
    except ImportError as e:
        print(f"❌ View import failed: {e}")
        return False

def test_urls():
    """Test that URL configurations are working"""
    try:
        from django.urls import reverse
        reverse('token_obtain_pair')
        reverse('project-list')
        reverse('hackathon-list')
        reverse('user_stats')
        print("✅ API routes resolve")
        return True
    except Exception as e:
        print(f"❌ URL test failed: {e}")
        return False


if __name__ == '__main__':
    print("🧪 Running Basic Tests for ProjectHub Backend\n")
    
    tests = [
        test_imports,
        test_serializers,
        test_views,
        test_urls
    ]
    
    passed = 0
    total = len(tests)
    
    for test in tests:
        if test():
            passed += 1
        print()
    
    print(f"📊 Test Results: {passed}/{total} tests passed")
    
    if passed == total:
        print("🎉 All tests passed! The basic setup is working correctly.")
        sys.exit(0)
    else:
        print("⚠️  Some tests failed. Check the output above for details.")
        sys.exit(1)
