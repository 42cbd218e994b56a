"""
Test fixtures shared across all controller-lint tests.
"""

from pathlib import Path

import pytest


ROUTES_SOURCE = """import router from '@adonisjs/core/services/router'
const UsersController = () => import('#controllers/users_controller')
const PostsController = () => import('#controllers/posts_controller')

router.get('/health', async () => ({ ok: true }))
router.get('/users', [UsersController, 'index'])
router.post('/users', [UsersController, 'store'])
router.get('/users/:id/posts/:post_id', [PostsController, 'show'])
router.delete("/users/:id", [UsersController, "destroy"]).as('users.destroy')
router
  .group(() => {
    router.patch('/users/:id', [UsersController, 'update'])
  })
  .prefix('/api')
"""

# Line numbers referenced by tests:
#   index 9, store 14, show 19, destroy 27, update 34
USERS_CONTROLLER_SOURCE = """import type { HttpContext } from '@adonisjs/core/http'
import BaseController from '#controllers/base_controller'
import { AppErrors } from '#lib/errors'
import { createUserValidator } from '#validators/user'

type User = { id: number; name: string }

export default class UsersController extends BaseController {
  async index({ request }: HttpContext) {
    const { page } = await request.validateUsing(listValidator)
    return this.successResponse<User[]>([])
  }

  async store({ request }: HttpContext) {
    const data = request.body()
    return this.successResponse(data)
  }

  async show({ params }: HttpContext) {
    if (!params.id) {
      return this.errorResponse(AppErrors.NOT_FOUND)
    }
    const user: User = { id: 1, name: 'Test' }
    return this.successResponse<User>(user)
  }

  async destroy({ params }: HttpContext) {
    if (!params.id) {
      return this.errorResponse({ status: 400, message: 'A rather long inline error message here' })
    }
    return this.successResponse<void>(undefined)
  }

  async update({ request, params }: HttpContext) {
    const payload = await request.validateUsing(createUserValidator)
    if (!payload) {
      return
    }
    return { id: params.id }
  }
}
"""

POSTS_CONTROLLER_SOURCE = """import type { HttpContext } from '@adonisjs/core/http'

export default class PostsController {
  async show({ params }: HttpContext) {
    return this.successResponse<Post>(params)
  }
}
"""


@pytest.fixture
def routes_source():
    return ROUTES_SOURCE


@pytest.fixture
def users_controller_source():
    return USERS_CONTROLLER_SOURCE


@pytest.fixture
def make_project(tmp_path):
    """Build an AdonisJS-like project tree: {relative_path: content} -> root."""

    def _make(files: dict[str, str]) -> Path:
        for rel, content in files.items():
            target = tmp_path / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return tmp_path

    return _make


@pytest.fixture
def sample_project(make_project):
    """Routes file plus users/posts controllers."""
    return make_project({
        "start/routes.ts": ROUTES_SOURCE,
        "app/controllers/users_controller.ts": USERS_CONTROLLER_SOURCE,
        "app/controllers/posts_controller.ts": POSTS_CONTROLLER_SOURCE,
    })
