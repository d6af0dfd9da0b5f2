"""
Master Database Seeding Script
Creates database tables and populates them with demo users, projects, tasks
and comments. Re-running skips rows that already exist.
"""

import sys
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError

from create_tables import create_tables
from demo_projects import DEMO_PROJECTS
from demo_tasks import DEMO_TASKS
from demo_users import DEMO_PASSWORD, DEMO_USERS
from taskhub.database import SessionLocal
from taskhub.models.comment import Comment
from taskhub.models.project import Project
from taskhub.models.task import Task
from taskhub.models.user import User
from taskhub.utils.normalize import canonical_priority, canonical_task_status
from taskhub.utils.security import hash_password


def banner(title):
    print(f"\n{'='*60}")
    print(f"🚀 {title}")
    print(f"{'='*60}")


def seed_demo_users(session):
    """Create demo users, returning every demo account by email"""
    banner("Creating Demo Users")
    users = {}
    created = 0

    for user_data in DEMO_USERS:
        user = session.query(User).filter(User.email == user_data["email"]).first()
        if user:
            print(f"[SKIP] User {user_data['email']} already exists, skipping...")
        else:
            user = User(
                name=user_data["name"],
                email=user_data["email"],
                hashed_password=hash_password(DEMO_PASSWORD),
                role=user_data["role"],
            )
            session.add(user)
            created += 1
            print(f"[SUCCESS] Created user: {user_data['name']} ({user_data['role']})")
        users[user.email] = user

    session.flush()
    print(f"\n[SUCCESS] Successfully created {created} demo users!")
    return users


def seed_demo_projects(session, users):
    banner("Creating Demo Projects")
    projects = {}
    created = 0

    for project_data in DEMO_PROJECTS:
        project = session.query(Project).filter(Project.title == project_data["title"]).first()
        if project:
            print(f"[SKIP] Project {project_data['title']} already exists, skipping...")
        else:
            project = Project(
                title=project_data["title"],
                description=project_data["description"],
                status=project_data["status"],
                creator=users[project_data["created_by"]],
            )
            project.members = [users[email] for email in project_data["members"]]
            session.add(project)
            created += 1
            print(f"[SUCCESS] Created project: {project.title} (Status: {project.status}, Members: {len(project.members)})")
        projects[project.title] = project

    session.flush()
    print(f"\n[SUCCESS] Successfully created {created} demo projects!")
    return projects


def seed_demo_tasks(session, users, projects):
    """Create demo tasks and their comments"""
    banner("Creating Demo Tasks")
    created = 0

    for task_data in DEMO_TASKS:
        project = projects[task_data["project"]]
        exists = (
            session.query(Task)
            .filter(Task.title == task_data["title"], Task.project_id == project.id)
            .first()
        )
        if exists:
            print(f"[SKIP] Task '{task_data['title']}' already exists, skipping...")
            continue

        assignee = users.get(task_data["assigned_to"]) if task_data["assigned_to"] else None
        task = Task(
            title=task_data["title"],
            description=task_data["description"],
            status=canonical_task_status(task_data["status"]),
            priority=canonical_priority(task_data["priority"]),
            due_date=task_data["due_date"],
            project=project,
            assignee=assignee,
            creator=project.creator,
        )
        for author_email, text in task_data["comments"]:
            task.comments.append(Comment(text=text, author=users[author_email]))
        session.add(task)
        created += 1

        assignee_name = assignee.name if assignee else "Unassigned"
        print(f"[SUCCESS] Created task: {task.title} ({project.title} -> {assignee_name})")

    print(f"\n[SUCCESS] Successfully created {created} demo tasks!")


def main():
    """Main function to run all seeding operations"""
    print("🌱 MASTER DATABASE SEEDING SCRIPT")
    print("=" * 60)
    print(f"Started at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")

    banner("Creating Database Tables")
    session = SessionLocal()
    try:
        create_tables()
        users = seed_demo_users(session)
        projects = seed_demo_projects(session, users)
        seed_demo_tasks(session, users, projects)
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        print(f"\n[ERROR] Seeding failed, nothing was saved: {e}")
        sys.exit(1)
    finally:
        session.close()

    print(f"\n{'='*60}")
    print("📊 SEEDING SUMMARY")
    print(f"{'='*60}")
    print(f"   - {len(DEMO_USERS)} Users (admin, managers, members)")
    print(f"   - {len(DEMO_PROJECTS)} Projects")
    print(f"   - {len(DEMO_TASKS)} Tasks with comments")
    print(f"\n[INFO] Login Credentials:")
    print(f"   - All demo users: {DEMO_PASSWORD}")
    print(f"\nCompleted at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")


if __name__ == "__main__":
    main()
