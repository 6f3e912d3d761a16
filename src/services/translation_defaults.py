"""Bundled fallback translation catalog.

Used only when no locales directory can be loaded. Keep the keys in step
with src/locales/*.json.
"""

# fmt: off
TRANSLATION_DEFAULTS: dict[str, dict] = {
    "en": {
        "auth": {
            "invalid_credentials": "Invalid email or password",
            "email_already_exists": "Email already exists",
            "user_not_found": "User not found",
            "invalid_token": "Invalid token",
            "token_expired": "Token expired",
            "password_updated": "Password updated successfully",
            "invalid_current_password": "Invalid current password",
            "password_too_weak": "Password is too weak",
            "logged_out": "Logged out successfully",
        },
        "platforms": {
            "not_found": "Platform not found",
            "already_exists": "Platform already exists",
            "created": "Platform created successfully",
            "updated": "Platform updated successfully",
            "deleted": "Platform deleted successfully",
        },
        "user_platforms": {
            "not_found": "User platform not found",
            "already_exists": "User platform already exists",
            "created": "User platform created successfully",
            "updated": "User platform updated successfully",
            "deleted": "User platform deleted successfully",
            "invalid_otp": "Invalid OTP code",
        },
        "users": {
            "not_found": "User not found",
            "created": "User created successfully",
            "updated": "User updated successfully",
            "deleted": "User deleted successfully",
            "password_changed": "Password changed successfully",
        },
        "common": {
            "internal_server_error": "Internal server error",
            "validation_error": "Validation error",
            "unauthorized": "Unauthorized",
            "forbidden": "Forbidden",
            "not_found": "Resource not found",
        },
    },
    "zh-CN": {
        "auth": {
            "invalid_credentials": "邮箱或密码错误",
            "email_already_exists": "邮箱已存在",
            "user_not_found": "用户不存在",
            "invalid_token": "无效的令牌",
            "token_expired": "令牌已过期",
            "password_updated": "密码更新成功",
            "invalid_current_password": "当前密码错误",
            "password_too_weak": "密码强度不足",
            "logged_out": "已退出登录",
        },
        "platforms": {
            "not_found": "平台不存在",
            "already_exists": "平台已存在",
            "created": "平台创建成功",
            "updated": "平台更新成功",
            "deleted": "平台删除成功",
        },
        "user_platforms": {
            "not_found": "用户平台不存在",
            "already_exists": "用户平台已存在",
            "created": "用户平台创建成功",
            "updated": "用户平台更新成功",
            "deleted": "用户平台删除成功",
            "invalid_otp": "无效的OTP验证码",
        },
        "users": {
            "not_found": "用户不存在",
            "created": "用户创建成功",
            "updated": "用户更新成功",
            "deleted": "用户删除成功",
            "password_changed": "密码修改成功",
        },
        "common": {
            "internal_server_error": "服务器内部错误",
            "validation_error": "验证错误",
            "unauthorized": "未授权",
            "forbidden": "禁止访问",
            "not_found": "资源不存在",
        },
    },
    "zh-TW": {
        "auth": {
            "invalid_credentials": "電子郵件或密碼錯誤",
            "email_already_exists": "電子郵件已存在",
            "user_not_found": "用戶不存在",
            "invalid_token": "無效的令牌",
            "token_expired": "令牌已過期",
            "password_updated": "密碼更新成功",
            "invalid_current_password": "當前密碼錯誤",
            "password_too_weak": "密碼強度不足",
            "logged_out": "已登出",
        },
        "platforms": {
            "not_found": "平台不存在",
            "already_exists": "平台已存在",
            "created": "平台創建成功",
            "updated": "平台更新成功",
            "deleted": "平台刪除成功",
        },
        "user_platforms": {
            "not_found": "用戶平台不存在",
            "already_exists": "用戶平台已存在",
            "created": "用戶平台創建成功",
            "updated": "用戶平台更新成功",
            "deleted": "用戶平台刪除成功",
            "invalid_otp": "無效的OTP驗證碼",
        },
        "users": {
            "not_found": "用戶不存在",
            "created": "用戶創建成功",
            "updated": "用戶更新成功",
            "deleted": "用戶刪除成功",
            "password_changed": "密碼修改成功",
        },
        "common": {
            "internal_server_error": "伺服器內部錯誤",
            "validation_error": "驗證錯誤",
            "unauthorized": "未授權",
            "forbidden": "禁止訪問",
            "not_found": "資源不存在",
        },
    },
}
# fmt: on
