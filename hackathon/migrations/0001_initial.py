import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('project', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Hackathon',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=200)),
                ('short_description', models.TextField(blank=True, null=True)),
                ('problem_statement', models.TextField(blank=True, null=True)),
                ('solution_description', models.TextField(blank=True, null=True)),
                ('tech_stack', models.JSONField(blank=True, default=list)),
                ('github_url', models.URLField(blank=True, max_length=500, null=True, verbose_name='github url')),
                ('deployed_url', models.URLField(blank=True, max_length=500, null=True, verbose_name='deployed url')),
                ('download_url', models.URLField(blank=True, max_length=500, null=True, verbose_name='download url')),
                ('qr_code_url', models.URLField(blank=True, max_length=500, null=True, verbose_name='QR code url')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('start_date', models.DateField(blank=True, null=True)),
                ('end_date', models.DateField(blank=True, null=True)),
                ('status', models.CharField(choices=[('upcoming', 'Upcoming'), ('ongoing', 'Ongoing'), ('completed', 'Completed')], default='upcoming', max_length=20)),
                ('created_by', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'hackathons',
                'ordering': ['-start_date', '-created_at'],
                'indexes': [
                    models.Index(fields=['-start_date'], name='hack_start_idx'),
                    models.Index(fields=['created_by', '-created_at'], name='hack_creator_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='HackathonMember',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('role', models.CharField(choices=[('Team Lead', 'Team Lead'), ('Frontend Developer', 'Frontend Developer'), ('Backend Developer', 'Backend Developer'), ('Full Stack Developer', 'Full Stack Developer'), ('Designer', 'Designer'), ('Other', 'Other')], default='Frontend Developer', max_length=30)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('hackathon', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='members', to='hackathon.hackathon')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'hackathon_members',
                'ordering': ['created_at'],
                'constraints': [
                    models.UniqueConstraint(fields=('hackathon', 'user'), name='unique_hackathon_member'),
                    models.UniqueConstraint(condition=models.Q(('role', 'Team Lead')), fields=('hackathon',), name='one_lead_per_hackathon'),
                ],
            },
        ),
        migrations.CreateModel(
            name='HackathonProject',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('hackathon', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='linked_projects', to='hackathon.hackathon')),
                ('project', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='hackathon_links', to='project.project')),
            ],
            options={
                'db_table': 'hackathon_projects',
                'ordering': ['created_at'],
                'constraints': [
                    models.UniqueConstraint(fields=('hackathon', 'project'), name='unique_hackathon_project'),
                ],
            },
        ),
    ]
