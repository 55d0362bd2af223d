"""Tests for the HTTP API."""

from fastapi import status

from classroom.models import Attendance, Lesson, LessonTask, Submission


def start_lesson(client, headers, group_id, task_ids):
    return client.post("/lessons/start", json={"groupId": group_id, "taskIds": task_ids}, headers=headers)


class TestAuthEndpoints:
    """Tests for login and token handling."""

    def test_login_and_me(self, client, teacher):
        response = client.post("/auth/login", json={"personalId": "T01", "role": "teacher"})
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["tokenType"] == "bearer"

        response = client.get("/auth/me", headers={"Authorization": f"Bearer {data['token']}"})
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"id": teacher.id, "role": "teacher", "name": "Ada Lovelace"}

    def test_login_with_wrong_role(self, client, teacher):
        response = client.post("/auth/login", json={"personalId": "T01", "role": "student"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_missing_and_invalid_tokens(self, client):
        assert client.get("/lessons/1/analytics").status_code == status.HTTP_401_UNAUTHORIZED
        response = client.get("/lessons/1/analytics", headers={"Authorization": "Bearer invalid_token"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestLessonEndpoints:
    """Tests for the lesson flow over HTTP."""

    def test_full_lesson_flow(self, client, db_session, teacher, students, sample_group, task_a, task_b, auth_headers):
        teacher_headers = auth_headers(teacher)
        student_headers = auth_headers(students[0])

        response = start_lesson(client, teacher_headers, sample_group.id, [task_a.id, task_b.id])
        assert response.status_code == status.HTTP_201_CREATED
        lesson = response.json()
        assert lesson["groupId"] == sample_group.id
        assert lesson["endTime"] is None
        assert "startTime" in lesson

        response = client.get(f"/lessons/{lesson['id']}/tasks", headers=student_headers)
        assert response.status_code == status.HTTP_200_OK
        tasks = response.json()
        assert [t["id"] for t in tasks] == [task_a.id, task_b.id]
        assert tasks[0]["questions"][0] == {"type": "multiple-choice", "question": "2 + 2?", "options": ["3", "4", "5"]}
        assert all("correctAnswer" not in q for t in tasks for q in t["questions"])
        assert all("teacherId" not in t for t in tasks)
        assert tasks[1]["questions"][0]["type"] == "open-ended"

        response = client.post(f"/lessons/{lesson['id']}/attend", headers=student_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["alreadyMarked"] is False
        response = client.post(f"/lessons/{lesson['id']}/attend", headers=student_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"message": "Attendance already marked", "alreadyMarked": True}

        answers = [
            {"questionIndex": 0, "selectedAnswer": 1},
            {"questionIndex": 1, "selectedAnswer": 1},
            {"questionIndex": 2, "textAnswer": "x"},
        ]
        response = client.post(f"/lessons/{lesson['id']}/submit", json={"answers": answers}, headers=student_headers)
        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["score"] == 50
        assert response.json()["answers"][2]["textAnswer"] == "x"

        response = client.post(f"/lessons/{lesson['id']}/submit", json={"answers": answers}, headers=student_headers)
        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["detail"] == "You have already submitted answers for this lesson."

        response = client.get(f"/lessons/{lesson['id']}/analytics", headers=teacher_headers)
        assert response.status_code == status.HTTP_200_OK
        analytics = response.json()
        assert analytics["averageScore"] == 50
        assert analytics["submissions"] == [
            {"studentId": students[0].id, "studentName": "Charles Babbage", "score": 50}
        ]
        assert analytics["attendees"] == [{"id": students[0].id, "studentName": "Charles Babbage"}]

        response = client.get(f"/lessons/{lesson['id']}/live", headers=teacher_headers)
        assert response.status_code == status.HTTP_200_OK
        live = response.json()
        assert [u["id"] for u in live["attendees"]] == [students[0].id]
        assert [u["personalId"] for u in live["submitters"]] == ["S01"]

        assert db_session.query(Attendance).count() == 1
        assert db_session.query(Submission).count() == 1

    def test_start_lesson_errors(self, client, db_session, teacher, other_teacher, students, sample_group, task_a,
                                 auth_headers):
        assert start_lesson(client, auth_headers(students[0]), sample_group.id, [task_a.id]).status_code == 403
        assert start_lesson(client, auth_headers(other_teacher), sample_group.id, [task_a.id]).status_code == 403
        assert start_lesson(client, auth_headers(teacher), sample_group.id, []).status_code == 400
        assert start_lesson(client, auth_headers(teacher), sample_group.id, [task_a.id, 999]).status_code == 404
        assert start_lesson(client, auth_headers(teacher), 999, [task_a.id]).status_code == 404

        response = client.post("/lessons/start", json={"groupId": sample_group.id}, headers=auth_headers(teacher))
        assert response.status_code == status.HTTP_400_BAD_REQUEST

        assert db_session.query(Lesson).count() == 0
        assert db_session.query(LessonTask).count() == 0

    def test_submit_requires_answer_list(self, client, students, sample_lesson, auth_headers):
        headers = auth_headers(students[0])
        response = client.post(f"/lessons/{sample_lesson.id}/submit", json={}, headers=headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        response = client.post(f"/lessons/{sample_lesson.id}/submit", json={"answers": "all of them"}, headers=headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_role_checks(self, client, teacher, students, sample_lesson, auth_headers):
        assert client.post(f"/lessons/{sample_lesson.id}/attend", headers=auth_headers(teacher)).status_code == 403
        response = client.post(f"/lessons/{sample_lesson.id}/submit", json={"answers": []}, headers=auth_headers(teacher))
        assert response.status_code == 403
        assert client.get(f"/lessons/{sample_lesson.id}/analytics", headers=auth_headers(students[0])).status_code == 403
        assert client.get(f"/lessons/{sample_lesson.id}/live", headers=auth_headers(students[0])).status_code == 403

    def test_owner_sees_answer_key(self, client, teacher, other_teacher, sample_lesson, auth_headers):
        response = client.get(f"/lessons/{sample_lesson.id}/tasks", headers=auth_headers(teacher))
        assert response.status_code == status.HTTP_200_OK
        assert [q["correctAnswer"] for q in response.json()[0]["questions"]] == [1, 0]

        response = client.get(f"/lessons/{sample_lesson.id}/tasks", headers=auth_headers(other_teacher))
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_outsider_cannot_read_lesson_tasks(self, client, outsider, sample_lesson, auth_headers):
        response = client.get(f"/lessons/{sample_lesson.id}/tasks", headers=auth_headers(outsider))
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_role_checked_before_body(self, client, teacher, students, sample_group, sample_lesson, auth_headers):
        response = client.post(f"/lessons/{sample_lesson.id}/submit", json={}, headers=auth_headers(teacher))
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["detail"] == "Forbidden: Only students can submit answers."

        response = client.post("/lessons/start", json={}, headers=auth_headers(students[0]))
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert client.post("/tasks", json={}, headers=auth_headers(students[0])).status_code == 403
        assert client.post("/groups", json={}, headers=auth_headers(students[0])).status_code == 403

    def test_unknown_lesson(self, client, teacher, students, auth_headers):
        assert client.get("/lessons/404/analytics", headers=auth_headers(teacher)).status_code == 404
        assert client.post("/lessons/404/attend", headers=auth_headers(students[0])).status_code == 404

    def test_empty_analytics(self, client, teacher, sample_lesson, auth_headers):
        response = client.get(f"/lessons/{sample_lesson.id}/analytics", headers=auth_headers(teacher))
        assert response.json()["averageScore"] == 0
        assert response.json()["submissions"] == []


class TestTaskAndGroupEndpoints:
    """Tests for task, group and history endpoints."""

    def test_create_and_list_tasks(self, client, teacher, auth_headers):
        payload = {
            "title": "Legacy quiz",
            "description": "No types given",
            "questions": [
                {"question": "1 + 1?", "options": ["1", "2"], "correctAnswer": 1},
                {"question": "Why?", "options": [], "correctAnswer": 0, "type": "open-ended"},
            ],
        }
        response = client.post("/tasks", json=payload, headers=auth_headers(teacher))
        assert response.status_code == status.HTTP_201_CREATED
        task = response.json()
        assert task["teacherId"] == teacher.id
        assert [q["type"] for q in task["questions"]] == ["multiple-choice", "open-ended"]

        response = client.get("/tasks", headers=auth_headers(teacher))
        assert [t["id"] for t in response.json()] == [task["id"]]

        response = client.get(f"/tasks/{task['id']}", headers=auth_headers(teacher))
        assert response.json()["title"] == "Legacy quiz"

    def test_create_task_with_bad_correct_answer(self, client, teacher, auth_headers):
        payload = {
            "title": "Broken",
            "questions": [{"question": "?", "options": ["a"], "correctAnswer": 3}],
        }
        response = client.post("/tasks", json=payload, headers=auth_headers(teacher))
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_missing_task(self, client, teacher, auth_headers):
        assert client.get("/tasks/999", headers=auth_headers(teacher)).status_code == 404

    def test_task_detail_limited_to_author(self, client, other_teacher, students, outsider, task_a, auth_headers):
        for user in (other_teacher, students[0], outsider):
            response = client.get(f"/tasks/{task_a.id}", headers=auth_headers(user))
            assert response.status_code == status.HTTP_403_FORBIDDEN
            assert "questions" not in response.json()

    def test_groups(self, client, teacher, students, sample_group, auth_headers):
        response = client.get("/groups", headers=auth_headers(students[1]))
        assert [g["id"] for g in response.json()] == [sample_group.id]

        response = client.get(f"/groups/{sample_group.id}", headers=auth_headers(teacher))
        assert response.status_code == status.HTTP_200_OK
        assert [s["name"] for s in response.json()["students"]] == [s.name for s in students]

        response = client.post(
            "/groups", json={"name": "Night class", "studentIds": [students[0].id]}, headers=auth_headers(teacher)
        )
        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["students"][0]["personalId"] == "S01"

    def test_active_lesson(self, client, students, sample_group, sample_lesson, auth_headers):
        response = client.get(f"/groups/{sample_group.id}/active-lesson", headers=auth_headers(students[0]))
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["id"] == sample_lesson.id

    def test_student_history(self, client, students, sample_lesson, auth_headers):
        headers = auth_headers(students[2])
        client.post(f"/lessons/{sample_lesson.id}/submit", json={"answers": []}, headers=headers)

        response = client.get("/student/lessons/history", headers=headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json()[0]["lessonId"] == sample_lesson.id
        assert response.json()[0]["score"] == 0
        assert response.json()[0]["taskTitle"] == "Arithmetic"


def test_root(client):
    response = client.get("/")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["message"] == "Classroom Live API"


def test_health(client):
    response = client.get("/health")
    assert response.json()["status"] == "healthy"
